"""Student model, pre-provisioned by index number."""
from geoattend import db
from geoattend.models.base import BaseModel

class Student(BaseModel):
    """Student account. Passwordless until onboarding."""

    __tablename__ = 'students'

    index_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(255), nullable=False)
    is_registered = db.Column(db.Boolean, default=False, nullable=False)

    # Relationships
    attendance_records = db.relationship('AttendanceRecord', backref='student', lazy='dynamic')

    def check_password(self, password: str) -> bool:
        """Check password; an account without one never matches."""
        from geoattend.services.password_service import PasswordService

        if not self.password_hash:
            return False
        return PasswordService.verify(self.password_hash, password)

    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary excluding the password hash."""
        exclude = (exclude or []) + ['password_hash']
        return super().to_dict(exclude=exclude)

    def __repr__(self) -> str:
        return f'<Student {self.index_number}>'
