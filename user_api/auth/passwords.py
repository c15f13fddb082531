import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
# bcrypt only looks at the first 72 bytes of the secret.
MAX_PASSWORD_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    hashed = bcrypt.hashpw(_encode(plain_password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed; treating as a mismatch")
        return False
