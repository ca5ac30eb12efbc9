"""
bcrypt hashing for room and admin passwords.
"""

import bcrypt

from hostelcare.core.logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashes with a configurable work factor."""

    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = 12):
        if not self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be within {self.MIN_ROUNDS}..{self.MAX_ROUNDS}, got {rounds}"
            )
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Raises:
            ValueError: If the password is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")
        digest = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """False for empty input or a malformed stored hash."""
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except ValueError as e:
            logger.warning(f"Stored password hash could not be checked: {e}")
            return False
