"""Models package with all models."""
from .base import BaseModel
from .identity import Role, Identity
from .student import Student
from .lecturer import Lecturer
from .course import Course
from .device_session import DeviceSession
from .attendance_window import AttendanceWindow
from .attendance import AttendanceRecord

__all__ = [
    'BaseModel', 'Role', 'Identity',
    'Student', 'Lecturer', 'Course', 'DeviceSession',
    'AttendanceWindow', 'AttendanceRecord'
]
