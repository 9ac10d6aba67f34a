"""
Password hashing for user accounts.
"""

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
_MAX_BCRYPT_PASSWORD_BYTES = 72


def is_password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > _MAX_BCRYPT_PASSWORD_BYTES


def hash_password(password: str) -> str:
    if is_password_too_long(password):
        raise ValueError("Password too long for bcrypt (max 72 bytes)")
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return _pwd_context.verify(password, password_hash)
