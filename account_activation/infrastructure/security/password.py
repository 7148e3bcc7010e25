from __future__ import annotations

from passlib.context import CryptContext

# bcrypt is the only scheme stored in the users table.
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain: str, password_hash: str) -> bool:
    """
    Verify a password against its stored hash. Empty or unrecognized
    hashes never verify.
    """
    if not password_hash:
        return False
    try:
        return _pwd.verify(plain, password_hash)
    except ValueError:
        return False
