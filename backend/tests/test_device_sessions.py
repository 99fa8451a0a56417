"""Tests for the device-session registry and its stores."""
from datetime import datetime
import pytest
from sqlalchemy.exc import IntegrityError
from geoattend import db
from geoattend.models.device_session import DeviceSession
from geoattend.models.identity import Role
from geoattend.services.device_session_service import (
    ActiveSessionExists, DeviceSessionRegistry, RedisDeviceSessionStore, SQLDeviceSessionStore
)
from geoattend.utils.errors import DeviceConflict

class FakeRedis:
    """Just enough of redis.Redis for the store: get, set (nx, xx) and delete."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, nx=False, xx=False):
        if (nx and key in self.data) or (xx and key not in self.data):
            return None
        self.data[key] = value
        return True

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

@pytest.fixture(params=['sql', 'redis'])
def store(request, app):
    if request.param == 'sql':
        return SQLDeviceSessionStore()
    return RedisDeviceSessionStore(FakeRedis())

@pytest.fixture
def sessions(store):
    return DeviceSessionRegistry(store)

def active_rows(identity_id, role):
    return DeviceSession.query.filter_by(identity_id=identity_id, role=role, is_active=True).count()

def test_no_active_device_initially(sessions):
    assert sessions.active_device(1, Role.STUDENT) is None

def test_login_binds_device(sessions):
    sessions.login(1, Role.STUDENT, 'phone-x')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'

def test_second_login_supersedes_first(sessions):
    sessions.login(1, Role.STUDENT, 'phone-x')
    sessions.login(1, Role.STUDENT, 'phone-y')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-y'

def test_roles_are_tracked_separately(sessions):
    sessions.login(1, Role.STUDENT, 'phone-x')
    sessions.login(1, Role.LECTURER, 'laptop')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'
    assert sessions.active_device(1, Role.LECTURER) == 'laptop'

def test_logout_clears_session_and_is_idempotent(sessions):
    sessions.login(1, Role.STUDENT, 'phone-x')
    sessions.logout(1, Role.STUDENT)
    sessions.logout(1, Role.STUDENT)
    assert sessions.active_device(1, Role.STUDENT) is None

def test_claim_binds_when_free(sessions):
    sessions.claim(1, Role.STUDENT, 'phone-x')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'

def test_claim_from_other_device_conflicts_without_change(sessions):
    sessions.claim(1, Role.STUDENT, 'phone-x')
    with pytest.raises(DeviceConflict):
        sessions.claim(1, Role.STUDENT, 'phone-y')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'

def test_claim_from_same_device_refreshes(sessions):
    sessions.claim(1, Role.STUDENT, 'phone-x')
    sessions.claim(1, Role.STUDENT, 'phone-x')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'

def test_claim_after_logout_allows_new_device(sessions):
    sessions.claim(1, Role.STUDENT, 'phone-x')
    sessions.logout(1, Role.STUDENT)
    sessions.claim(1, Role.STUDENT, 'phone-y')
    assert sessions.active_device(1, Role.STUDENT) == 'phone-y'

def test_store_rejects_second_active_session(store):
    store.insert_active(1, Role.STUDENT, 'phone-x')
    with pytest.raises(ActiveSessionExists):
        store.insert_active(1, Role.STUDENT, 'phone-y')
    assert store.active_device(1, Role.STUDENT) == 'phone-x'

def test_racing_claim_loses_to_store_constraint(sessions, store, monkeypatch):
    """Two devices both see "no session"; the store lets only one win."""
    sessions.claim(1, Role.STUDENT, 'phone-x')

    real_active_device = store.active_device
    reads = []

    def stale_first_read(identity_id, role):
        reads.append(role)
        if len(reads) == 1:
            return None
        return real_active_device(identity_id, role)

    monkeypatch.setattr(store, 'active_device', stale_first_read)

    with pytest.raises(DeviceConflict):
        sessions.claim(1, Role.STUDENT, 'phone-y')

    assert real_active_device(1, Role.STUDENT) == 'phone-x'

def test_sql_store_keeps_one_active_row(app):
    sessions = DeviceSessionRegistry(SQLDeviceSessionStore())
    sessions.login(7, Role.STUDENT, 'phone-x')
    sessions.login(7, Role.STUDENT, 'phone-y')
    sessions.login(7, Role.STUDENT, 'phone-z')

    assert active_rows(7, Role.STUDENT) == 1
    assert DeviceSession.query.filter_by(identity_id=7).count() == 3

def test_sql_unique_index_rejects_direct_duplicate(app):
    db.session.add(DeviceSession(identity_id=3, role=Role.STUDENT, device_id='a', is_active=True))
    db.session.commit()
    db.session.add(DeviceSession(identity_id=3, role=Role.STUDENT, device_id='b', is_active=True))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()
    assert active_rows(3, Role.STUDENT) == 1

def test_redis_store_key_layout():
    client = FakeRedis()
    store = RedisDeviceSessionStore(client, prefix='ds')
    store.insert_active(5, Role.LECTURER, 'laptop')

    assert list(client.data) == ['ds:lecturer:5']
    assert store.active_device(5, Role.LECTURER) == 'laptop'

def test_logout_from_replaced_device_keeps_successor(sessions):
    sessions.claim(1, Role.STUDENT, 'phone-x')
    sessions.logout(1, Role.STUDENT, 'phone-x')
    sessions.claim(1, Role.STUDENT, 'phone-y')

    assert sessions.logout(1, Role.STUDENT, 'phone-x') is False
    assert sessions.active_device(1, Role.STUDENT) == 'phone-y'

    assert sessions.logout(1, Role.STUDENT, 'phone-y') is True
    assert sessions.active_device(1, Role.STUDENT) is None

def test_touch_keeps_device_and_ignores_missing_session(sessions):
    sessions.touch(1, Role.STUDENT)
    assert sessions.active_device(1, Role.STUDENT) is None

    sessions.login(1, Role.STUDENT, 'phone-x')
    sessions.touch(1, Role.STUDENT)
    assert sessions.active_device(1, Role.STUDENT) == 'phone-x'

def test_sql_touch_refreshes_last_seen(app):
    sessions = DeviceSessionRegistry(SQLDeviceSessionStore())
    sessions.login(4, Role.STUDENT, 'phone-x')
    row = DeviceSession.query.filter_by(identity_id=4, is_active=True).first()
    row.last_seen = datetime(2020, 1, 1)
    db.session.commit()

    sessions.touch(4, Role.STUDENT)

    db.session.expire_all()
    row = DeviceSession.query.filter_by(identity_id=4, is_active=True).first()
    assert row.last_seen > datetime(2020, 1, 1)
