# backend/geoattend/utils/decorators.py
"""Custom decorators for authentication and authorization."""
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required
from geoattend.models.identity import Identity, Role
from geoattend.services.device_session_service import get_registry
from geoattend.utils.errors import DeviceMismatch, PermissionDenied
from geoattend.utils.helpers import error_response

def session_required(*roles: Role, check_device: bool = True):
    """Require a valid token for a live identity.

    Sets ``g.identity`` and ``g.device_id``. With ``check_device`` the
    token's device must still be the identity's active device, so a logged
    out or evicted token stops working on its next request.
    """
    def decorator(f):
        @wraps(f)
        @jwt_required()
        def decorated_function(*args, **kwargs):
            claims = get_jwt()
            role = Role.parse(claims.get('role'))
            identity = Identity.load(role, int(get_jwt_identity()))

            if identity is None:
                return error_response("User not found", 404)

            if roles and identity.role not in roles:
                raise PermissionDenied(f"{' or '.join(r.value.title() for r in roles)} access required")

            device_id = claims.get('device_id')
            if check_device and get_registry().active_device(identity.id, role) != device_id:
                raise DeviceMismatch()

            g.identity = identity
            g.device_id = device_id
            return f(*args, **kwargs)
        return decorated_function
    return decorator

def lecturer_required(f):
    """Decorator to require lecturer role."""
    return session_required(Role.LECTURER)(f)

def student_required(f):
    """Decorator to require student role."""
    return session_required(Role.STUDENT)(f)
