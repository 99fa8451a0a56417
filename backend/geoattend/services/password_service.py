"""Password hashing service.

Stored form is ``<hex scrypt digest>.<hex salt>``.
"""
import hashlib
import hmac
import secrets

from geoattend.utils.errors import CredentialFormatError

class PasswordService:
    """Salted scrypt hashing with constant-time verification."""

    SEPARATOR = '.'
    SALT_BYTES = 16
    KEY_LENGTH = 64
    # scrypt cost parameters
    N = 16384
    R = 8
    P = 1

    @staticmethod
    def _derive(secret: str, salt: str) -> bytes:
        return hashlib.scrypt(
            secret.encode('utf-8'),
            salt=salt.encode('utf-8'),
            n=PasswordService.N,
            r=PasswordService.R,
            p=PasswordService.P,
            dklen=PasswordService.KEY_LENGTH
        )

    @staticmethod
    def hash(secret: str) -> str:
        """Hash a secret with a fresh random salt."""
        salt = secrets.token_hex(PasswordService.SALT_BYTES)
        digest = PasswordService._derive(secret, salt)
        return f"{digest.hex()}{PasswordService.SEPARATOR}{salt}"

    @staticmethod
    def verify(stored: str, supplied: str) -> bool:
        """Check ``supplied`` against a stored hash without early exit."""
        try:
            digest_hex, salt = stored.split(PasswordService.SEPARATOR)
            expected = bytes.fromhex(digest_hex)
            bytes.fromhex(salt)
        except (AttributeError, ValueError):
            raise CredentialFormatError('Stored password hash is malformed')

        if len(expected) != PasswordService.KEY_LENGTH:
            raise CredentialFormatError('Stored password hash has the wrong length')

        supplied_digest = PasswordService._derive(supplied or '', salt)
        return hmac.compare_digest(expected, supplied_digest)
