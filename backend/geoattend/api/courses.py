# backend/geoattend/api/courses.py
"""Course API endpoints."""
from flask import Blueprint, request, g
from geoattend.services.course_service import CourseService
from geoattend.utils.decorators import lecturer_required, session_required
from geoattend.utils.helpers import success_response
from geoattend.utils.validators import Validator

courses_bp = Blueprint('courses', __name__)

@courses_bp.route('', methods=['GET'])
@session_required()
def list_courses():
    """List all courses."""
    courses = CourseService.list_courses()
    return success_response(
        data=[course.to_dict() for course in courses],
        message=f"Found {len(courses)} courses"
    )

@courses_bp.route('', methods=['POST'])
@lecturer_required
def create_course():
    """Create a course owned by the calling lecturer."""
    data = Validator.require_json(request.get_json(silent=True))
    Validator.validate_required_fields(data, ['code', 'name'])

    course = CourseService.create_course(
        code=Validator.string(data, 'code'),
        name=Validator.string(data, 'name'),
        lecturer_id=g.identity.id
    )

    return success_response(
        data=course.to_dict(),
        message="Course created",
        status_code=201
    )
