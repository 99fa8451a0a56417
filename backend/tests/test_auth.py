"""Test authentication endpoints."""
import json
from geoattend import db
from geoattend.models.identity import Role
from geoattend.models.student import Student
from conftest import login, auth_header

def test_health_check(client):
    """Test auth health endpoint."""
    response = client.get('/api/auth/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Auth service is running'

def test_login_success(client, student, registry):
    """Test successful login binds the device."""
    response = login(client, 'ST999', 'student123', 'student', 'phone-x')

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] == False
    assert 'access_token' in data['data']
    assert data['data']['role'] == 'student'
    assert data['data']['user']['index_number'] == 'ST999'
    assert 'password_hash' not in data['data']['user']
    assert registry.active_device(student.id, Role.STUDENT) == 'phone-x'

def test_lecturer_login(client, lecturer):
    response = login(client, 'prof.doe', 'admin123', 'lecturer', 'laptop')
    assert response.status_code == 200
    assert response.get_json()['data']['user']['username'] == 'prof.doe'

def test_login_invalid_credentials(client, student):
    """Test login with invalid credentials."""
    response = login(client, 'ST999', 'wrongpassword', 'student', 'phone-x')
    assert response.status_code == 401

    response = login(client, 'ST000', 'student123', 'student', 'phone-x')
    assert response.status_code == 401

def test_login_role_decides_lookup(client, lecturer):
    response = login(client, 'prof.doe', 'admin123', 'student', 'laptop')
    assert response.status_code == 401

def test_login_pending_student_must_onboard(client, pending_student):
    response = login(client, 'ST001', 'whatever', 'student', 'phone-x')
    assert response.status_code == 401
    assert 'onboarding' in response.get_json()['message']

def test_login_validation(client):
    """Test login validation."""
    response = client.post('/api/auth/login', json={})
    assert response.status_code == 400

    response = login(client, 'ST999', 'student123', 'admin', 'phone-x')
    assert response.status_code == 400
    assert response.get_json()['field'] == 'role'

    response = client.post('/api/auth/login', data='not json', content_type='text/plain')
    assert response.status_code == 400

def test_login_from_second_device_conflicts(client, student, registry):
    """Device Y cannot log in while device X holds the session."""
    assert login(client, 'ST999', 'student123', 'student', 'X').status_code == 200

    response = login(client, 'ST999', 'student123', 'student', 'Y')

    assert response.status_code == 409
    assert response.get_json()['error'] == True
    assert registry.active_device(student.id, Role.STUDENT) == 'X'

def test_relogin_from_same_device(client, student, registry):
    assert login(client, 'ST999', 'student123', 'student', 'X').status_code == 200
    assert login(client, 'ST999', 'student123', 'student', 'X').status_code == 200
    assert registry.active_device(student.id, Role.STUDENT) == 'X'

def test_logout_releases_device(client, student, registry):
    headers = auth_header(login(client, 'ST999', 'student123', 'student', 'X'))

    response = client.post('/api/auth/logout', headers=headers)

    assert response.status_code == 200
    assert registry.active_device(student.id, Role.STUDENT) is None
    assert login(client, 'ST999', 'student123', 'student', 'Y').status_code == 200

def test_logout_without_token_succeeds(client):
    response = client.post('/api/auth/logout')
    assert response.status_code == 200

def test_get_current_user(client, student_headers):
    """Test get current user profile."""
    response = client.get('/api/auth/me', headers=student_headers)

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] == False
    assert data['data']['user']['index_number'] == 'ST999'
    assert data['data']['role'] == 'student'
    assert data['data']['device_id'] == 'phone-x'

def test_token_stops_working_after_logout(client, student_headers):
    client.post('/api/auth/logout', headers=student_headers)

    response = client.get('/api/auth/me', headers=student_headers)

    assert response.status_code == 401

def test_token_of_evicted_device_is_rejected(client, student, student_headers, registry):
    registry.login(student.id, Role.STUDENT, 'phone-y')

    response = client.get('/api/auth/me', headers=student_headers)

    assert response.status_code == 401
    assert 'Device mismatch' in response.get_json()['message']

def test_me_requires_token(client):
    response = client.get('/api/auth/me')
    assert response.status_code == 401

def test_onboard_success(client, pending_student):
    response = client.post('/api/auth/onboard', json={
        'indexNumber': 'ST001',
        'newPassword': 'fresh-pass'
    })

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['is_registered'] is True
    assert 'password_hash' not in data

    assert login(client, 'ST001', 'fresh-pass', 'student', 'phone-a').status_code == 200

def test_onboard_already_registered(client, student):
    response = client.post('/api/auth/onboard', json={
        'indexNumber': 'ST999',
        'newPassword': 'another-pass'
    })
    assert response.status_code == 400
    assert 'already registered' in response.get_json()['message']

    db.session.expire_all()
    assert Student.query.filter_by(index_number='ST999').first().check_password('student123')

def test_onboard_unknown_index(client):
    response = client.post('/api/auth/onboard', json={
        'indexNumber': 'NOPE',
        'newPassword': 'fresh-pass'
    })
    assert response.status_code == 404

def test_onboard_short_password(client, pending_student):
    response = client.post('/api/auth/onboard', json={
        'indexNumber': 'ST001',
        'newPassword': '123'
    })
    assert response.status_code == 400
    assert response.get_json()['field'] == 'newPassword'

def test_stale_token_logout_keeps_new_device(client, student, registry):
    """A token from a device that logged out cannot end the next device's session."""
    old_headers = auth_header(login(client, 'ST999', 'student123', 'student', 'phone-x'))
    assert client.post('/api/auth/logout', headers=old_headers).status_code == 200

    new_headers = auth_header(login(client, 'ST999', 'student123', 'student', 'phone-y'))

    response = client.post('/api/auth/logout', headers=old_headers)

    assert response.status_code == 200
    assert registry.active_device(student.id, Role.STUDENT) == 'phone-y'
    assert client.get('/api/auth/me', headers=new_headers).status_code == 200
