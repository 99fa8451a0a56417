"""Shared fixtures: testing app, client and seeded identities."""
import pytest
from geoattend import create_app, db
from geoattend.models.course import Course
from geoattend.models.lecturer import Lecturer
from geoattend.models.student import Student
from geoattend.services.password_service import PasswordService

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def registry(app):
    """Device-session registry of the test app."""
    return app.extensions['device_sessions']

@pytest.fixture
def lecturer(app):
    lecturer = Lecturer(
        username='prof.doe',
        name='Professor John Doe',
        password_hash=PasswordService.hash('admin123')
    )
    return lecturer.save()

@pytest.fixture
def course(lecturer):
    return Course(code='CS101', name='Intro to Computer Science', lecturer_id=lecturer.id).save()

@pytest.fixture
def student(app):
    """Registered student ready to log in."""
    student = Student(
        index_number='ST999',
        name='Test Student',
        password_hash=PasswordService.hash('student123'),
        is_registered=True
    )
    return student.save()

@pytest.fixture
def second_student(app):
    student = Student(
        index_number='ST998',
        name='Second Student',
        password_hash=PasswordService.hash('student123'),
        is_registered=True
    )
    return student.save()

@pytest.fixture
def pending_student(app):
    """Pre-provisioned student that has not onboarded yet."""
    return Student(index_number='ST001', name='Alice Student', is_registered=False).save()

def login(client, username, password, role, device_id):
    return client.post('/api/auth/login', json={
        'username': username,
        'password': password,
        'role': role,
        'deviceId': device_id
    })

def auth_header(response):
    token = response.get_json()['data']['access_token']
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def lecturer_headers(client, lecturer):
    response = login(client, 'prof.doe', 'admin123', 'lecturer', 'lecturer-laptop')
    assert response.status_code == 200
    return auth_header(response)

@pytest.fixture
def student_headers(client, student):
    response = login(client, 'ST999', 'student123', 'student', 'phone-x')
    assert response.status_code == 200
    return auth_header(response)
