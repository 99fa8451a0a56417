# backend/geoattend/services/student_service.py
"""Student provisioning service."""
from typing import Dict, Iterable, Tuple

from geoattend import db
from geoattend.models.student import Student

class StudentService:
    """Service for pre-provisioning students by index number."""

    @staticmethod
    def upsert_student(index_number: str, name: str) -> Tuple[str, Student]:
        """Create or rename a student. Returns ('added'|'updated'|'skipped', student).

        Never touches password or registration state.
        """
        index_number = (index_number or '').strip()
        name = (name or '').strip()

        if not index_number or not name:
            raise ValueError("index number and name are required")

        student = Student.query.filter_by(index_number=index_number).first()

        if student is None:
            student = Student(index_number=index_number, name=name, is_registered=False)
            db.session.add(student)
            db.session.commit()
            return 'added', student

        if student.name != name:
            student.name = name
            db.session.commit()
            return 'updated', student

        return 'skipped', student

    @staticmethod
    def import_students(records: Iterable[Dict]) -> Dict:
        """Upsert many students; a failing row is reported, not fatal."""
        summary = {'added': 0, 'updated': 0, 'skipped': 0, 'errors': []}

        for position, row in enumerate(records, start=1):
            index_number = row.get('indexNumber', row.get('index_number'))
            try:
                outcome, _ = StudentService.upsert_student(index_number, row.get('name'))
                summary[outcome] += 1
            except Exception as e:
                db.session.rollback()
                summary['errors'].append(
                    f"Row {position} ({index_number or 'unknown'}): {str(e)}"
                )

        return summary
