# backend/geoattend/services/attendance_service.py
"""Attendance marking with ordered verification."""
from datetime import datetime
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from geoattend import db
from geoattend.models.attendance import AttendanceRecord
from geoattend.models.attendance_window import AttendanceWindow
from geoattend.models.course import Course
from geoattend.models.identity import Identity, Role
from geoattend.models.student import Student
from geoattend.services.device_session_service import DeviceSessionRegistry
from geoattend.services.geofence_service import GeofenceService
from geoattend.services.window_service import WindowService
from geoattend.utils.errors import (
    DeviceMismatch, DuplicateAttendance, OutOfRange, PermissionDenied, WindowInactive
)

class AttendanceService:
    """Decides and records attendance-marking attempts."""

    def __init__(self, registry: DeviceSessionRegistry):
        self.registry = registry

    @staticmethod
    def check_role(identity: Identity) -> None:
        if identity.role is not Role.STUDENT:
            raise PermissionDenied("Only students can mark attendance")

    def mark(self, window_id: int, identity: Identity, device_id: str,
             latitude: float, longitude: float,
             token_device_id: Optional[str] = None) -> AttendanceRecord:
        """Mark attendance, failing on the first check that does not pass.

        Order: role, window, device, geofence, duplicate. When the caller's
        token names a device, it must be the submitted device as well.
        """
        self.check_role(identity)

        window = WindowService.get(window_id)
        if not window.is_active:
            raise WindowInactive()

        bound = self.registry.active_device(identity.id, Role.STUDENT)
        if bound != device_id or token_device_id not in (None, device_id):
            current_app.logger.warning(
                'Device mismatch for student %s on window %s', identity.id, window_id
            )
            raise DeviceMismatch()
        self.registry.touch(identity.id, Role.STUDENT)

        location = GeofenceService.verify_location(latitude, longitude, window)
        if not location['is_inside']:
            current_app.logger.warning(
                'Student %s out of range for window %s: %.1fm > %sm',
                identity.id, window_id, location['distance'], window.radius_meters
            )
            raise OutOfRange(location['distance'], window.radius_meters)

        record = AttendanceRecord(
            window_id=window.id,
            student_id=identity.id,
            timestamp=datetime.utcnow(),
            latitude=latitude,
            longitude=longitude
        )
        db.session.add(record)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateAttendance()

        current_app.logger.info(
            'Attendance marked: student %s, window %s, %.1fm from centre',
            identity.id, window_id, location['distance']
        )
        return record

    @staticmethod
    def history(student_id: int) -> List[Dict]:
        """Student's own records with window and course, oldest first."""
        rows = (
            db.session.query(AttendanceRecord, AttendanceWindow, Course)
            .join(AttendanceWindow, AttendanceRecord.window_id == AttendanceWindow.id)
            .join(Course, AttendanceWindow.course_id == Course.id)
            .filter(AttendanceRecord.student_id == student_id)
            .order_by(AttendanceRecord.timestamp, AttendanceRecord.id)
            .all()
        )

        return [
            {
                'record': record.to_dict(),
                'window': window.to_dict(),
                'course': course.to_dict()
            }
            for record, window, course in rows
        ]

    @staticmethod
    def window_report(window_id: int) -> List[Dict]:
        """Records of one window with the student who marked each."""
        WindowService.get(window_id)

        rows = (
            db.session.query(AttendanceRecord, Student)
            .join(Student, AttendanceRecord.student_id == Student.id)
            .filter(AttendanceRecord.window_id == window_id)
            .order_by(AttendanceRecord.timestamp, AttendanceRecord.id)
            .all()
        )

        return [
            {'record': record.to_dict(), 'student': student.to_dict()}
            for record, student in rows
        ]
