# backend/geoattend/services/course_service.py
"""Course catalogue service."""
from typing import List

from flask import current_app
from sqlalchemy.exc import IntegrityError

from geoattend import db
from geoattend.models.course import Course
from geoattend.utils.errors import ValidationError

class CourseService:
    """List and create the courses windows are opened for."""

    @staticmethod
    def list_courses() -> List[Course]:
        return Course.query.order_by(Course.code).all()

    @staticmethod
    def create_course(code: str, name: str, lecturer_id: int) -> Course:
        """Create a course owned by ``lecturer_id``. Codes are unique."""
        code = (code or '').strip()
        name = (name or '').strip()

        if not code:
            raise ValidationError("code is required", field='code')
        if len(code) > 20:
            raise ValidationError("code must be at most 20 characters", field='code')
        if not name:
            raise ValidationError("name is required", field='name')

        course = Course(code=code, name=name, lecturer_id=lecturer_id)
        db.session.add(course)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError(f"Course {code} already exists", field='code')

        current_app.logger.info('Lecturer %s created course %s', lecturer_id, code)
        return course
