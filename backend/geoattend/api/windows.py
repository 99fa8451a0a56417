# backend/geoattend/api/windows.py
"""Attendance window API endpoints."""
from flask import Blueprint, request
from geoattend.models.identity import Role
from geoattend.services.attendance_service import AttendanceService
from geoattend.services.window_service import WindowService
from geoattend.utils.decorators import lecturer_required, session_required
from geoattend.utils.helpers import success_response
from geoattend.utils.validators import Validator

windows_bp = Blueprint('windows', __name__)

@windows_bp.route('', methods=['POST'])
@lecturer_required
def open_window():
    """Open an attendance window for a course."""
    data = Validator.require_json(request.get_json(silent=True))
    Validator.validate_required_fields(data, ['courseId', 'latitude', 'longitude', 'radiusMeters'])

    window = WindowService.open(
        course_id=Validator.integer(data, 'courseId'),
        latitude=Validator.coordinate(data, 'latitude'),
        longitude=Validator.coordinate(data, 'longitude'),
        radius_meters=Validator.positive_integer(data, 'radiusMeters')
    )

    return success_response(
        data=window.to_dict(),
        message="Attendance window opened",
        status_code=201
    )

@windows_bp.route('/active', methods=['GET'])
@session_required()
def list_active_windows():
    """List active windows with their course."""
    windows = WindowService.list_active()
    return success_response(
        data=windows,
        message=f"Found {len(windows)} active windows"
    )

@windows_bp.route('/<int:window_id>/stop', methods=['POST'])
@lecturer_required
def stop_window(window_id):
    """Stop a window. Stopping twice is not an error."""
    window = WindowService.stop(window_id)
    return success_response(
        data=window.to_dict(),
        message="Attendance window stopped"
    )

@windows_bp.route('/<int:window_id>/records', methods=['GET'])
@session_required(Role.LECTURER)
def window_records(window_id):
    """Attendance report for one window."""
    records = AttendanceService.window_report(window_id)
    return success_response(
        data=records,
        message=f"Found {len(records)} records"
    )
