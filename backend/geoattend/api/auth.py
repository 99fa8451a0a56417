# File: backend/geoattend/api/auth.py
"""Authentication API: login with device binding, logout and onboarding."""
from flask import Blueprint, request, g
from flask_jwt_extended import jwt_required, get_jwt, get_jwt_identity
from geoattend import limiter
from geoattend.models.identity import Role
from geoattend.services.auth_service import AuthService
from geoattend.services.device_session_service import get_registry
from geoattend.utils.decorators import session_required
from geoattend.utils.errors import ValidationError
from geoattend.utils.helpers import success_response
from geoattend.utils.validators import Validator

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return success_response(message="Auth service is running")

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Student (index number) or lecturer (username) login bound to a device."""
    data = Validator.require_json(request.get_json(silent=True))
    Validator.validate_required_fields(data, ["username", "password", "role", "deviceId"])

    username = Validator.string(data, "username")
    password = data["password"]
    if not isinstance(password, str):
        raise ValidationError("password must be a string", field="password")
    device_id = Validator.string(data, "deviceId")

    result = AuthService(get_registry()).login(username, password, data["role"], device_id)

    return success_response(
        data=result,
        message="Login successful"
    )

@auth_bp.route("/logout", methods=["POST"])
@jwt_required(optional=True)
def logout():
    """Release the device session; succeeds even without a valid token."""
    identity_id = get_jwt_identity()

    if identity_id is not None:
        claims = get_jwt()
        AuthService(get_registry()).logout(
            int(identity_id),
            Role.parse(claims.get("role")),
            claims.get("device_id")
        )

    return success_response(message="Logged out")

@auth_bp.route("/onboard", methods=["POST"])
@limiter.limit("5 per hour")
def onboard():
    """First-time password setup for a pre-provisioned student."""
    data = Validator.require_json(request.get_json(silent=True))
    Validator.validate_required_fields(data, ["indexNumber", "newPassword"])

    index_number = Validator.string(data, "indexNumber")
    student = AuthService.onboard(index_number, data["newPassword"])

    return success_response(
        data=student.to_dict(),
        message="Account activated. Please login."
    )

@auth_bp.route("/me", methods=["GET"])
@session_required()
def get_current_user():
    """Get current identity profile."""
    return success_response(data={
        "user": g.identity.to_dict(),
        "role": g.identity.role.value,
        "device_id": g.device_id
    })
