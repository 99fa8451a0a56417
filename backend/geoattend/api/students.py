# backend/geoattend/api/students.py
"""Student provisioning API."""
from flask import Blueprint, request
from geoattend.services.student_service import StudentService
from geoattend.utils.decorators import lecturer_required
from geoattend.utils.errors import ValidationError
from geoattend.utils.helpers import success_response
from geoattend.utils.validators import Validator

students_bp = Blueprint('students', __name__)

@students_bp.route('/import', methods=['POST'])
@lecturer_required
def import_students():
    """Bulk create or rename students by index number."""
    data = Validator.require_json(request.get_json(silent=True))
    rows = data.get('students')

    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise ValidationError("students must be a list of objects", field='students')

    summary = StudentService.import_students(rows)

    return success_response(
        data=summary,
        message=f"Imported {summary['added']} new students"
    )
