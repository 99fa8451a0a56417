"""Attendance record model."""
from datetime import datetime
from geoattend import db
from geoattend.models.base import BaseModel

class AttendanceRecord(BaseModel):
    """One student's presence in one window, with the submitted position."""

    __tablename__ = 'attendance_records'

    window_id = db.Column(db.Integer, db.ForeignKey('attendance_windows.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Location where check-in happened
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('window_id', 'student_id', name='uq_attendance_window_student'),
    )

    def __repr__(self):
        return f'<AttendanceRecord {self.student_id}-{self.window_id}>'
