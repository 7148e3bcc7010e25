import hashlib

EMAIL = "a@b.com"
PASSWORD_HASH = "P"
SALT = "S"


def sha1_check(email: str = EMAIL, password_hash: str = PASSWORD_HASH, salt: str = SALT):
    return hashlib.sha1((email + password_hash + salt).encode("utf-8")).hexdigest()
