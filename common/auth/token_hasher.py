"""
Digests for tokens kept server-side.

Refresh tokens are persisted only as SHA-256 hex digests, so a leaked
``users`` collection does not yield usable tokens.
"""

import hashlib


class TokenHasher:
    """SHA-256 digests of opaque or signed tokens."""

    @staticmethod
    def hash_token(token: str) -> str:
        """
        Args:
            token: Token as issued to the client

        Returns:
            Hex-encoded SHA-256 digest (64 chars)
        """
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
