"""Password hashing — werkzeug salted hashes with a configurable method."""

from werkzeug.security import check_password_hash, generate_password_hash

from argan_hr.config import get_settings


def hash_password(password: str) -> str:
    return generate_password_hash(password, method=get_settings().password_hash_method)


def verify_password(password_hash: str | None, password: str) -> bool:
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)
