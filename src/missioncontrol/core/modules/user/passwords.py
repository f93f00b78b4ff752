"""Password hashing built on bcrypt.

bcrypt only reads the first 72 bytes of its input, so passwords are reduced
to a fixed 44-byte SHA-256 digest first. Passwords of any length hash
without error, and long passwords sharing a prefix stay distinct.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
