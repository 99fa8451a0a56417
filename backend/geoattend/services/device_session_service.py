"""Device-session registry: one active device per identity."""
import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from geoattend import db
from geoattend.models.device_session import DeviceSession
from geoattend.models.identity import Role
from geoattend.utils.errors import DeviceConflict

class ActiveSessionExists(Exception):
    """The store already holds an active session for the identity."""

class DeviceSessionStore(ABC):
    """Backing store for device sessions.

    Implementations must enforce "at most one active session per
    (identity_id, role)" themselves, so ``insert_active`` is atomic.
    """

    @abstractmethod
    def active_device(self, identity_id: int, role: Role) -> Optional[str]:
        """Device id of the active session, or None."""

    @abstractmethod
    def insert_active(self, identity_id: int, role: Role, device_id: str) -> None:
        """Create an active session; raise ActiveSessionExists if one exists."""

    @abstractmethod
    def replace_active(self, identity_id: int, role: Role, device_id: str) -> None:
        """Deactivate any active session and create a new one in one step."""

    @abstractmethod
    def deactivate(self, identity_id: int, role: Role, device_id: Optional[str] = None) -> bool:
        """Deactivate the active session, if any.

        With ``device_id`` only a session held by that device is ended.
        Returns whether a session was ended.
        """

    @abstractmethod
    def touch(self, identity_id: int, role: Role) -> None:
        """Refresh ``last_seen`` of the active session, if any."""

class SQLDeviceSessionStore(DeviceSessionStore):
    """Store on the ``device_sessions`` table and its partial unique index."""

    @staticmethod
    def _active_query(identity_id: int, role: Role):
        return DeviceSession.query.filter_by(
            identity_id=identity_id,
            role=role,
            is_active=True
        )

    def active_device(self, identity_id: int, role: Role) -> Optional[str]:
        session = self._active_query(identity_id, role).first()
        return session.device_id if session else None

    def insert_active(self, identity_id: int, role: Role, device_id: str) -> None:
        db.session.add(DeviceSession(
            identity_id=identity_id,
            role=role,
            device_id=device_id,
            is_active=True,
            last_seen=datetime.utcnow()
        ))
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ActiveSessionExists()

    def replace_active(self, identity_id: int, role: Role, device_id: str) -> None:
        self._active_query(identity_id, role).update(
            {'is_active': False}, synchronize_session=False
        )
        # flush the deactivation before the insert so the index sees it
        db.session.flush()
        self.insert_active(identity_id, role, device_id)

    def deactivate(self, identity_id: int, role: Role, device_id: Optional[str] = None) -> bool:
        query = self._active_query(identity_id, role)
        if device_id is not None:
            query = query.filter_by(device_id=device_id)
        ended = query.update({'is_active': False}, synchronize_session=False)
        db.session.commit()
        return bool(ended)

    def touch(self, identity_id: int, role: Role) -> None:
        self._active_query(identity_id, role).update(
            {'last_seen': datetime.utcnow()}, synchronize_session=False
        )
        db.session.commit()

class RedisDeviceSessionStore(DeviceSessionStore):
    """Store keeping one key per identity; ``SET NX`` gives atomic insert."""

    def __init__(self, client, prefix: str = 'device_session'):
        self.client = client
        self.prefix = prefix

    def _key(self, identity_id: int, role: Role) -> str:
        return f'{self.prefix}:{role.value}:{identity_id}'

    @staticmethod
    def _payload(device_id: str) -> str:
        return json.dumps({
            'device_id': device_id,
            'last_seen': datetime.utcnow().isoformat()
        })

    def active_device(self, identity_id: int, role: Role) -> Optional[str]:
        raw = self.client.get(self._key(identity_id, role))
        if raw is None:
            return None
        return json.loads(raw)['device_id']

    def insert_active(self, identity_id: int, role: Role, device_id: str) -> None:
        created = self.client.set(
            self._key(identity_id, role), self._payload(device_id), nx=True
        )
        if not created:
            raise ActiveSessionExists()

    def replace_active(self, identity_id: int, role: Role, device_id: str) -> None:
        self.client.set(self._key(identity_id, role), self._payload(device_id))

    def deactivate(self, identity_id: int, role: Role, device_id: Optional[str] = None) -> bool:
        key = self._key(identity_id, role)
        if device_id is not None and self.active_device(identity_id, role) != device_id:
            return False
        return bool(self.client.delete(key))

    def touch(self, identity_id: int, role: Role) -> None:
        device_id = self.active_device(identity_id, role)
        if device_id is not None:
            # xx: never resurrect a session deleted in between
            self.client.set(self._key(identity_id, role), self._payload(device_id), xx=True)

class DeviceSessionRegistry:
    """Tracks which single device holds each identity's active login.

    ``login`` supersedes unconditionally (last login wins). The
    authentication flow goes through ``claim`` instead, which blocks a
    second device rather than evicting the first.
    """

    def __init__(self, store: DeviceSessionStore):
        self.store = store

    def login(self, identity_id: int, role: Role, device_id: str) -> None:
        """Bind ``device_id`` as the only active device, evicting any other."""
        self.store.replace_active(identity_id, role, device_id)

    def active_device(self, identity_id: int, role: Role) -> Optional[str]:
        return self.store.active_device(identity_id, role)

    def logout(self, identity_id: int, role: Role, device_id: Optional[str] = None) -> bool:
        """End the active session.

        Given ``device_id``, the session is only ended when that device holds
        it, so a token from a replaced device cannot log out its successor.
        """
        return self.store.deactivate(identity_id, role, device_id)

    def touch(self, identity_id: int, role: Role) -> None:
        self.store.touch(identity_id, role)

    def claim(self, identity_id: int, role: Role, device_id: str) -> None:
        """Bind ``device_id`` unless another device already holds the session.

        Re-login from the bound device refreshes the session. A concurrent
        claim that wins the insert makes this one fail with DeviceConflict.
        """
        current = self.store.active_device(identity_id, role)

        if current is not None and current != device_id:
            self._conflict(identity_id, role, device_id)

        if current == device_id:
            try:
                self.login(identity_id, role, device_id)
            except ActiveSessionExists:
                self._recheck(identity_id, role, device_id)
            return

        try:
            self.store.insert_active(identity_id, role, device_id)
        except ActiveSessionExists:
            self._recheck(identity_id, role, device_id)

    def _recheck(self, identity_id: int, role: Role, device_id: str) -> None:
        if self.store.active_device(identity_id, role) != device_id:
            self._conflict(identity_id, role, device_id)

    @staticmethod
    def _conflict(identity_id: int, role: Role, device_id: str) -> None:
        current_app.logger.warning(
            'Device conflict for %s %s from device %s', role.value, identity_id, device_id
        )
        raise DeviceConflict()

def get_registry() -> DeviceSessionRegistry:
    """Registry built by the app factory for the current app."""
    return current_app.extensions['device_sessions']
