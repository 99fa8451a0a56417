"""Device session binding one identity to one device."""
from datetime import datetime
from geoattend import db
from geoattend.models.base import BaseModel
from geoattend.models.identity import Role

class DeviceSession(BaseModel):
    """Login session bound to a client-generated device id.

    The partial unique index allows many historical rows per identity but
    only one with ``is_active`` set.
    """

    __tablename__ = 'device_sessions'

    identity_id = db.Column(db.Integer, nullable=False)
    role = db.Column(db.Enum(Role), nullable=False)
    device_id = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_seen = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.Index(
            'uq_device_sessions_active_identity',
            'identity_id', 'role',
            unique=True,
            sqlite_where=db.text('is_active = 1'),
            postgresql_where=db.text('is_active = true')
        ),
    )

    def __repr__(self) -> str:
        return f'<DeviceSession {self.role.value}:{self.identity_id} {self.device_id}>'
