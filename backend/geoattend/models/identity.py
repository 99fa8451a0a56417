"""Role-tagged identity shared by students and lecturers."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from geoattend.utils.errors import ValidationError

class Role(Enum):
    """Identity roles enumeration."""
    STUDENT = 'student'
    LECTURER = 'lecturer'

    @classmethod
    def parse(cls, value) -> 'Role':
        """Parse a role tag, raising ValidationError on anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError("role must be 'student' or 'lecturer'", field='role')

@dataclass(frozen=True)
class Identity:
    """An authenticated student or lecturer.

    ``record`` is a ``Student`` when ``role`` is ``Role.STUDENT`` and a
    ``Lecturer`` when it is ``Role.LECTURER``.
    """
    role: Role
    record: Union['Student', 'Lecturer']

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def is_student(self) -> bool:
        return self.role is Role.STUDENT

    @property
    def is_lecturer(self) -> bool:
        return self.role is Role.LECTURER

    @classmethod
    def load(cls, role: Role, identity_id: int) -> Optional['Identity']:
        """Fetch the identity row for ``role``; None if it no longer exists."""
        from geoattend.models.student import Student
        from geoattend.models.lecturer import Lecturer

        model = Student if role is Role.STUDENT else Lecturer
        record = model.get_by_id(identity_id)
        return cls(role, record) if record else None

    def to_dict(self) -> dict:
        return self.record.to_dict()
