# File: backend/geoattend/api/attendance.py
"""Attendance API endpoints."""
from flask import Blueprint, request, g
from geoattend.services.attendance_service import AttendanceService
from geoattend.services.device_session_service import get_registry
from geoattend.utils.decorators import session_required, student_required
from geoattend.utils.helpers import success_response
from geoattend.utils.validators import Validator

attendance_bp = Blueprint('attendance', __name__)

@attendance_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Attendance service is running')

@attendance_bp.route('', methods=['POST'])
@session_required(check_device=False)
def mark_attendance():
    """Mark attendance for the current student.

    Role, window and device are checked by the service in that order, so
    the device check is not done by the decorator here. The role is checked
    before the body is parsed.
    """
    service = AttendanceService(get_registry())
    service.check_role(g.identity)

    data = Validator.require_json(request.get_json(silent=True))
    Validator.validate_required_fields(data, ['windowId', 'lat', 'lng', 'deviceId'])

    record = service.mark(
        window_id=Validator.integer(data, 'windowId'),
        identity=g.identity,
        device_id=Validator.string(data, 'deviceId'),
        latitude=Validator.coordinate(data, 'lat'),
        longitude=Validator.coordinate(data, 'lng'),
        token_device_id=g.device_id
    )

    return success_response(
        data=record.to_dict(),
        message="Attendance marked",
        status_code=201
    )

@attendance_bp.route('/history', methods=['GET'])
@student_required
def history():
    """Current student's attendance history."""
    records = AttendanceService.history(g.identity.id)
    return success_response(data=records)
