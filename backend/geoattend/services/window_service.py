# backend/geoattend/services/window_service.py
"""Attendance window lifecycle service."""
from datetime import datetime
from typing import Dict, List

from flask import current_app

from geoattend import db
from geoattend.models.attendance_window import AttendanceWindow
from geoattend.models.course import Course
from geoattend.utils.errors import ValidationError, WindowNotFound

class WindowService:
    """Open, list and stop attendance windows."""

    @staticmethod
    def open(course_id: int, latitude: float, longitude: float, radius_meters: int) -> AttendanceWindow:
        """Open an active window centred on the given point."""
        if isinstance(radius_meters, bool) or not isinstance(radius_meters, int) or radius_meters <= 0:
            raise ValidationError("radiusMeters must be a positive integer", field='radiusMeters')

        if Course.get_by_id(course_id) is None:
            raise ValidationError(f"Course {course_id} does not exist", field='courseId')

        window = AttendanceWindow(
            course_id=course_id,
            latitude=float(latitude),
            longitude=float(longitude),
            radius_meters=radius_meters,
            start_time=datetime.utcnow(),
            end_time=None,
            is_active=True
        )
        window.save()

        current_app.logger.info(
            'Opened attendance window %s for course %s (radius %sm)',
            window.id, course_id, radius_meters
        )
        return window

    @staticmethod
    def get(window_id: int) -> AttendanceWindow:
        window = AttendanceWindow.get_by_id(window_id)
        if window is None:
            raise WindowNotFound()
        return window

    @staticmethod
    def list_active() -> List[Dict]:
        """Active windows with their course, newest first."""
        rows = (
            db.session.query(AttendanceWindow, Course)
            .join(Course, AttendanceWindow.course_id == Course.id)
            .filter(AttendanceWindow.is_active.is_(True))
            .order_by(AttendanceWindow.start_time.desc(), AttendanceWindow.id.desc())
            .all()
        )

        return [
            {'window': window.to_dict(), 'course': course.to_dict()}
            for window, course in rows
        ]

    @staticmethod
    def stop(window_id: int) -> AttendanceWindow:
        """Stop a window. Stopping a stopped window returns it unchanged."""
        window = WindowService.get(window_id)

        now = datetime.utcnow()
        stopped = AttendanceWindow.query.filter_by(id=window_id, is_active=True).update(
            {'is_active': False, 'end_time': now, 'updated_at': now},
            synchronize_session=False
        )
        db.session.commit()

        if stopped:
            current_app.logger.info('Stopped attendance window %s', window_id)
        else:
            current_app.logger.info('Attendance window %s was already stopped', window_id)

        db.session.refresh(window)
        return window
