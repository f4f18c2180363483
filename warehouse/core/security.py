"""
==============================================================================
Security Module - Password Hashing
==============================================================================

Password hashing and verification for the warehouse login.

This module implements:
- SecurityManager: Singleton class for password operations

Stored Password Formats:
-----------------------
- bcrypt hashes ($2b$...) written by AuthService.register_user
- plaintext entries from legacy user files

Both are verified through one passlib CryptContext; bcrypt is the
default scheme for new entries.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache

from passlib.context import CryptContext


# Module logger
logger = logging.getLogger(__name__)


class SecurityManager:
    """
    Centralized security manager for password operations.

    Attributes:
        _pwd_context: Passlib context for password hashing

    Example:
        >>> security = SecurityManager()
        >>> hashed = security.hash_password("secret123")
        >>> security.verify_password("secret123", hashed)
        True
        >>> security.verify_password("secret123", "secret123")
        True
    """

    # =========================================================================
    # CLASS CONSTANTS
    # =========================================================================

    # plaintext must stay last: it identifies any string
    PASSWORD_SCHEMES = ["bcrypt", "plaintext"]
    PASSWORD_DEPRECATED = ["plaintext"]

    def __init__(self) -> None:
        """Set up the password hashing context."""
        self._pwd_context = CryptContext(
            schemes=self.PASSWORD_SCHEMES,
            deprecated=self.PASSWORD_DEPRECATED
        )

        logger.debug("SecurityManager initialized")

    # =========================================================================
    # PASSWORD HASHING METHODS
    # =========================================================================

    def hash_password(self, plain_password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Bcrypt hash string (includes algorithm, salt, and hash)

        Raises:
            ValueError: If the password is empty
        """
        if not plain_password:
            raise ValueError("Password cannot be empty")

        hashed = self._pwd_context.hash(plain_password)
        logger.debug("Password hashed successfully")
        return hashed

    def verify_password(
        self,
        plain_password: str,
        stored_password: str
    ) -> bool:
        """
        Verify a plain text password against a stored entry.

        Args:
            plain_password: The plain text password to verify
            stored_password: Bcrypt hash or legacy plaintext entry

        Returns:
            True if password matches, False otherwise
        """
        if not plain_password or not stored_password:
            return False

        try:
            return self._pwd_context.verify(plain_password, stored_password)
        except (ValueError, TypeError) as e:
            # Log error but don't expose details
            logger.warning(f"Password verification error: {type(e).__name__}")
            return False

    def needs_rehash(self, stored_password: str) -> bool:
        """True for entries still stored in plaintext."""
        return self._pwd_context.needs_update(stored_password)


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """
    Get the global SecurityManager instance (singleton pattern).

    Returns:
        Global SecurityManager instance
    """
    return SecurityManager()
