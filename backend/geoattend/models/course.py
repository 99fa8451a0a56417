"""Course model."""
from geoattend import db
from geoattend.models.base import BaseModel

class Course(BaseModel):
    """Course metadata joined onto attendance windows."""

    __tablename__ = 'courses'

    code = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    lecturer_id = db.Column(db.Integer, db.ForeignKey('lecturers.id'), nullable=False)

    # Relationships
    windows = db.relationship('AttendanceWindow', backref='course', lazy='dynamic')

    def __repr__(self) -> str:
        return f'<Course {self.code}>'
