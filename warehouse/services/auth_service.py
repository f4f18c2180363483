"""
==============================================================================
Authentication Service Module
==============================================================================

Credential check for the warehouse menu.

Authentication Flow:
-------------------
    ┌─────────────┐
    │   Login     │
    │  Request    │
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │ Superadmin  │────▶│   Match     │ → True
    │   Check     │     └─────────────┘
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │ Users File  │────▶│ File Absent │ → False (logged)
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐
    │  Verify     │ → True on first matching entry, else False
    │  Password   │
    └─────────────┘

Users File Format:
-----------------
    username, password

The password part is either a bcrypt hash or a legacy plaintext entry.

==============================================================================
"""

from __future__ import annotations

import hmac
import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from warehouse.config import get_settings
from warehouse.core import exceptions
from warehouse.core.security import SecurityManager, get_security_manager
from warehouse.utils.validators import BoundedNameValidator


# Module logger
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for the interactive menu.

    Attributes:
        _users_file: Credential file location
        _security: SecurityManager for password verification
        _settings: Application settings

    Example:
        >>> auth_service = AuthService()
        >>> auth_service.login("superadmin", "admin123")
        True
        >>> auth_service.register_user("picker1", "secret42")
        >>> auth_service.login("picker1", "secret42")
        True
    """

    def __init__(
        self,
        users_file: Union[str, Path, None] = None,
        security: Optional[SecurityManager] = None
    ) -> None:
        """
        Initialize the authentication service.

        Args:
            users_file: Credential file (settings if None)
            security: Optional SecurityManager (uses singleton if None)
        """
        self._settings = get_settings()
        self._users_file = Path(users_file) if users_file else self._settings.users_path
        self._security = security or get_security_manager()
        self._username_validator = BoundedNameValidator("username")

    @property
    def users_file(self) -> Path:
        return self._users_file

    # =========================================================================
    # AUTHENTICATION METHODS
    # =========================================================================

    def login(self, username: str, password: str) -> bool:
        """
        Check a username/password pair.

        Args:
            username: Login name (case-sensitive, surrounding whitespace ignored)
            password: Plain text password

        Returns:
            True if the pair matches the superadmin or a users file entry
        """
        username = username.strip()

        if self._is_superadmin(username, password):
            logger.info(f"✅ User authenticated: {username} (superadmin)")
            return True

        if not self._users_file.is_file():
            logger.error(f"Failed to open users file: {self._users_file}")
            return False

        for file_username, stored_password in self._read_entries():
            if file_username != username:
                continue
            if self._security.verify_password(password, stored_password):
                if self._security.needs_rehash(stored_password):
                    logger.warning(f"⚠️ User {username} has a plaintext password entry")
                logger.info(f"✅ User authenticated: {username}")
                return True

        logger.warning(f"Login failed: invalid username or password - {username}")
        return False

    def _is_superadmin(self, username: str, password: str) -> bool:
        return (
            hmac.compare_digest(
                username.encode("utf-8"),
                self._settings.superadmin_username.encode("utf-8")
            )
            and hmac.compare_digest(
                password.encode("utf-8"),
                self._settings.superadmin_password.encode("utf-8")
            )
        )

    def _read_entries(self) -> Iterator[Tuple[str, str]]:
        """Yield (username, stored password) pairs; lines without a comma are skipped."""
        with self._users_file.open("r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                username, sep, stored = line.partition(",")
                if not sep or not stored.strip():
                    logger.debug(f"Skipping users file line {line_number}: no password")
                    continue

                yield username.strip(), stored.strip()

    # =========================================================================
    # USER MANAGEMENT
    # =========================================================================

    def user_exists(self, username: str) -> bool:
        """Check whether a username is present in the users file."""
        if not self._users_file.is_file():
            return False
        return any(name == username.strip() for name, _ in self._read_entries())

    def register_user(self, username: str, password: str) -> None:
        """
        Append a user with a bcrypt-hashed password.

        Raises:
            InvalidInput: If the username is malformed or already taken,
                or the password is empty
        """
        is_valid, normalized, error = self._username_validator.validate(username)
        if not is_valid:
            raise exceptions.invalid_input("username", error or "Invalid")

        if " " in normalized:
            raise exceptions.invalid_input("username", "username cannot contain spaces")

        if not password or password.strip() != password or " " in password:
            raise exceptions.invalid_input("password", "password cannot be empty or contain spaces")

        if normalized == self._settings.superadmin_username or self.user_exists(normalized):
            raise exceptions.invalid_input("username", f"'{normalized}' already exists")

        hashed = self._security.hash_password(password)

        self._users_file.parent.mkdir(parents=True, exist_ok=True)
        with self._users_file.open("a", encoding="utf-8") as f:
            f.write(f"{normalized}, {hashed}\n")

        logger.info(f"✅ User registered: {normalized}")
