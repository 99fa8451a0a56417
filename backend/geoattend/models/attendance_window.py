"""Attendance window: a time- and location-bounded marking period."""
from datetime import datetime
from geoattend import db
from geoattend.models.base import BaseModel

class AttendanceWindow(BaseModel):
    """Window opened by a lecturer for one course.

    Once stopped, ``end_time`` is set and ``is_active`` stays false.
    """

    __tablename__ = 'attendance_windows'

    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    radius_meters = db.Column(db.Integer, nullable=False)
    start_time = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    end_time = db.Column(db.DateTime, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    # Relationships
    records = db.relationship('AttendanceRecord', backref='window', lazy='dynamic')

    def to_dict(self, exclude: list = None) -> dict:
        data = super().to_dict(exclude=exclude)
        data['location'] = {
            'latitude': self.latitude,
            'longitude': self.longitude
        }
        return data

    def __repr__(self) -> str:
        return f'<AttendanceWindow {self.id} course={self.course_id}>'
