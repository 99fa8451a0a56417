"""Authentication service: login, logout and student onboarding."""
from datetime import datetime

from flask import current_app
from flask_jwt_extended import create_access_token

from geoattend import db
from geoattend.models.identity import Identity, Role
from geoattend.models.lecturer import Lecturer
from geoattend.models.student import Student
from geoattend.services.device_session_service import DeviceSessionRegistry
from geoattend.services.password_service import PasswordService
from geoattend.utils.errors import (
    AccountNotActivated, AlreadyRegistered, IdentityNotFound, InvalidCredentials
)
from geoattend.utils.validators import Validator

class AuthService:
    def __init__(self, registry: DeviceSessionRegistry):
        self.registry = registry

    @staticmethod
    def authenticate(username: str, password: str, role: Role) -> Identity:
        """Verify credentials and return the identity."""
        if role is Role.STUDENT:
            user = Student.query.filter_by(index_number=username).first()
            if user and not user.is_registered:
                raise AccountNotActivated()
        else:
            user = Lecturer.query.filter_by(username=username).first()

        if not user or not user.check_password(password):
            raise InvalidCredentials()

        return Identity(role, user)

    def login(self, username: str, password: str, role, device_id: str) -> dict:
        """Authenticate, bind the device and issue an access token."""
        role = Role.parse(role)
        identity = self.authenticate(username, password, role)

        self.registry.claim(identity.id, role, device_id)

        access_token = create_access_token(
            identity=str(identity.id),
            additional_claims={'role': role.value, 'device_id': device_id}
        )

        current_app.logger.info(
            'Login: %s %s on device %s', role.value, identity.id, device_id
        )

        return {
            'access_token': access_token,
            'user': identity.to_dict(),
            'role': role.value
        }

    def logout(self, identity_id: int, role: Role, device_id: str = None) -> bool:
        """Release the session held by ``device_id``; a stale device is a no-op."""
        released = self.registry.logout(identity_id, role, device_id)
        if released:
            current_app.logger.info('Logout: %s %s', role.value, identity_id)
        else:
            current_app.logger.info(
                'Logout from inactive device %s ignored for %s %s',
                device_id, role.value, identity_id
            )
        return released

    @staticmethod
    def onboard(index_number: str, new_password: str) -> Student:
        """Set a pre-provisioned student's first password."""
        Validator.validate_password(
            new_password,
            min_length=current_app.config.get('MIN_PASSWORD_LENGTH', 6),
            field='newPassword'
        )

        student = Student.query.filter_by(index_number=index_number).first()
        if not student:
            raise IdentityNotFound()

        if student.is_registered:
            raise AlreadyRegistered()

        # conditional update: only one concurrent onboarding can flip the flag
        activated = Student.query.filter_by(id=student.id, is_registered=False).update(
            {
                'password_hash': PasswordService.hash(new_password),
                'is_registered': True,
                'updated_at': datetime.utcnow()
            },
            synchronize_session=False
        )
        db.session.commit()

        if not activated:
            raise AlreadyRegistered()

        db.session.refresh(student)
        current_app.logger.info('Student %s onboarded', student.index_number)
        return student
