# File: backend/geoattend/services/seed_service.py
"""Database seeding service for demo data."""
from geoattend import db
from geoattend.models.course import Course
from geoattend.models.lecturer import Lecturer
from geoattend.models.student import Student
from geoattend.services.password_service import PasswordService

class SeedService:
    """Service to seed database with demo data."""

    @staticmethod
    def seed_all() -> bool:
        """Seed everything once. Returns False when data already exists."""
        if Student.query.filter_by(index_number='ST001').first():
            return False

        lecturer = SeedService.seed_lecturer()
        SeedService.seed_courses(lecturer)
        SeedService.seed_students()
        return True

    @staticmethod
    def seed_lecturer() -> Lecturer:
        lecturer = Lecturer(
            username='prof.doe',
            name='Professor John Doe',
            password_hash=PasswordService.hash('admin123')
        )
        db.session.add(lecturer)
        db.session.commit()
        return lecturer

    @staticmethod
    def seed_courses(lecturer: Lecturer) -> None:
        courses = [
            ('CS101', 'Intro to Computer Science'),
            ('ENG202', 'Advanced Engineering'),
        ]
        for code, name in courses:
            db.session.add(Course(code=code, name=name, lecturer_id=lecturer.id))
        db.session.commit()

    @staticmethod
    def seed_students() -> None:
        """Two students awaiting onboarding and one ready to log in."""
        db.session.add(Student(index_number='ST001', name='Alice Student', is_registered=False))
        db.session.add(Student(index_number='ST002', name='Bob Scholar', is_registered=False))
        db.session.add(Student(
            index_number='ST999',
            name='Test Student (Registered)',
            password_hash=PasswordService.hash('student123'),
            is_registered=True
        ))
        db.session.commit()
