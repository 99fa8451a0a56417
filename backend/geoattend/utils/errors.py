"""Error kinds raised by the attendance engine.

Each error is an expected condition the caller can recover from. The app
factory renders them through ``error_response`` using ``status_code`` and
``details``; anything else reaching the boundary is an internal error.
"""
from typing import Any, Dict

class AttendanceError(Exception):
    """Base class for every user-facing engine error."""

    status_code = 400
    default_message = 'Request failed'

    def __init__(self, message: str = None, **details: Any):
        self.message = message or self.default_message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'message': self.message, **self.details}

class ValidationError(AttendanceError):
    """Malformed or missing input."""
    status_code = 400
    default_message = 'Invalid request data'

    def __init__(self, message: str = None, field: str = None):
        if field is None:
            super().__init__(message)
        else:
            super().__init__(message, field=field)
        self.field = field

class InvalidCredentials(AttendanceError):
    status_code = 401
    default_message = 'Invalid credentials'

class AccountNotActivated(InvalidCredentials):
    default_message = "Account not activated. Please use 'First Time' onboarding."

class PermissionDenied(AttendanceError):
    status_code = 403
    default_message = 'You are not allowed to perform this action'

class DeviceConflict(AttendanceError):
    """Another device holds the identity's active session."""
    status_code = 409
    default_message = 'You have an active session on another device. Log out there first.'

class DeviceMismatch(AttendanceError):
    """The request comes from a device other than the one bound at login."""
    status_code = 401
    default_message = 'Device mismatch. Please login again.'

class WindowNotFound(AttendanceError):
    status_code = 404
    default_message = 'Attendance window not found'

class WindowInactive(AttendanceError):
    status_code = 400
    default_message = 'Attendance window is not active'

class OutOfRange(AttendanceError):
    """Submitted position is outside the window's geofence."""
    status_code = 400

    def __init__(self, distance: float, allowed_radius: int):
        super().__init__(
            f'You are too far away! Distance: {round(distance)}m. Allowed: {allowed_radius}m.',
            distance=distance,
            allowed_radius=allowed_radius
        )
        self.distance = distance
        self.allowed_radius = allowed_radius

class DuplicateAttendance(AttendanceError):
    status_code = 409
    default_message = 'Attendance already marked for this window'

class AlreadyRegistered(AttendanceError):
    status_code = 400
    default_message = 'Account already registered. Please login.'

class IdentityNotFound(AttendanceError):
    status_code = 404
    default_message = 'Index number not found in system'

class CredentialFormatError(RuntimeError):
    """A stored credential is malformed. This is a configuration fault."""
