"""Lecturer model."""
from geoattend import db
from geoattend.models.base import BaseModel

class Lecturer(BaseModel):
    """Lecturer account; opens and stops attendance windows."""

    __tablename__ = 'lecturers'

    username = db.Column(db.String(100), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)

    # Relationships
    courses = db.relationship('Course', backref='lecturer', lazy='dynamic')

    def check_password(self, password: str) -> bool:
        from geoattend.services.password_service import PasswordService

        return PasswordService.verify(self.password_hash, password)

    def to_dict(self, exclude: list = None) -> dict:
        exclude = (exclude or []) + ['password_hash']
        return super().to_dict(exclude=exclude)

    def __repr__(self) -> str:
        return f'<Lecturer {self.username}>'
