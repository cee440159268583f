"""Password hashing and verification with bcrypt."""

import bcrypt

# Bcrypt cost (rounds); overridden per deployment with BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 10

# Input validation limits shared by the account service and the CLI.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def _to_bytes(plain_password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes and newer releases reject longer input.
    return plain_password.encode("utf-8")[:72]


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Every call uses a fresh salt."""
    return bcrypt.hashpw(_to_bytes(plain_password), bcrypt.gensalt(rounds=rounds)).decode(
        "utf-8"
    )


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. A malformed stored hash raises ValueError.
    """
    return bcrypt.checkpw(_to_bytes(plain_password), hashed.encode("utf-8"))
