"""
bcrypt password hashing.

Passwords are pre-hashed with SHA-256 before bcrypt, which sidesteps bcrypt's
72-byte input limit and gives consistent behavior for every password length.

Example:
    hasher = PasswordHasher(rounds=12)
    hashed = hasher.hash("password123")
    hasher.verify("password123", hashed)  # True
"""

import base64
import hashlib

import bcrypt as bcrypt_lib


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt."""

    def __init__(self, rounds: int = 12):
        """
        Args:
            rounds: bcrypt cost factor (4..31)
        """
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt with SHA-256 pre-hashing."""
        salt = bcrypt_lib.gensalt(rounds=self.rounds)
        return bcrypt_lib.hashpw(self._prehash(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash."""
        if not password or not hashed:
            return False
        try:
            return bcrypt_lib.checkpw(self._prehash(password), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash
            return False
