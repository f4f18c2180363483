"""
==============================================================================
Authentication Tests
==============================================================================

Tests for the superadmin check, users file entries and registration.

==============================================================================
"""

import pytest
from pathlib import Path

from warehouse.core import InvalidInput, SecurityManager
from warehouse.services import AuthService


@pytest.fixture
def users_file(isolated_settings: Path) -> Path:
    """Users file with one legacy plaintext entry."""
    path = isolated_settings / "user.txt"
    path.write_text("picker1, secret42\nbroken-line\n", encoding="utf-8")
    return path


class TestLogin:
    """Tests for AuthService.login."""

    def test_superadmin(self):
        """The built-in account works without a users file."""
        assert AuthService().login("superadmin", "admin123") is True

    def test_superadmin_wrong_password(self):
        """A wrong superadmin password fails."""
        assert AuthService().login("superadmin", "admin") is False

    def test_missing_users_file(self):
        """Without a users file only the superadmin can log in."""
        assert AuthService().login("picker1", "secret42") is False

    def test_plaintext_entry(self, users_file: Path):
        """Legacy plaintext entries still verify."""
        auth = AuthService()
        assert auth.users_file == users_file
        assert auth.login("picker1", "secret42") is True

    def test_username_is_trimmed(self, users_file: Path):
        """Surrounding whitespace in the typed name is ignored."""
        assert AuthService().login("  picker1 ", "secret42") is True

    def test_wrong_password(self, users_file: Path):
        """A matching user with the wrong password fails."""
        assert AuthService().login("picker1", "secret") is False

    def test_username_case_sensitive(self, users_file: Path):
        """Usernames are compared exactly."""
        assert AuthService().login("Picker1", "secret42") is False

    def test_unknown_user(self, users_file: Path):
        """An unknown name fails."""
        assert AuthService().login("nobody", "secret42") is False

    def test_explicit_users_file(self, tmp_path: Path):
        """An explicit path overrides the configured one."""
        path = tmp_path / "other.txt"
        path.write_text("loader, pa55word\n", encoding="utf-8")
        assert AuthService(users_file=path).login("loader", "pa55word") is True


class TestRegister:
    """Tests for AuthService.register_user."""

    def test_register_then_login(self):
        """A registered user logs in with a hashed entry."""
        auth = AuthService()

        auth.register_user("loader", "pa55word")

        line = auth.users_file.read_text(encoding="utf-8").strip()
        name, _, stored = line.partition(", ")
        assert name == "loader"
        assert stored.startswith("$2")
        assert auth.user_exists("loader")
        assert auth.login("loader", "pa55word") is True

    def test_register_duplicate(self, users_file: Path):
        """An existing username is rejected."""
        with pytest.raises(InvalidInput):
            AuthService().register_user("picker1", "another1")

    def test_register_superadmin_name(self):
        """The built-in account name cannot be registered."""
        with pytest.raises(InvalidInput):
            AuthService().register_user("superadmin", "another1")

    @pytest.mark.parametrize(
        "username,password",
        [("", "pa55word"), ("two words", "pa55word"), ("loader", ""), ("loader", "pa55 word")],
    )
    def test_register_invalid(self, username: str, password: str):
        """Empty or spaced credentials are rejected before writing."""
        auth = AuthService()
        with pytest.raises(InvalidInput):
            auth.register_user(username, password)
        assert not auth.users_file.exists()


class TestSecurityManager:
    """Tests for password hashing."""

    def test_hash_and_verify(self):
        """bcrypt hashes verify and are not flagged for rehash."""
        security = SecurityManager()
        hashed = security.hash_password("pa55word")

        assert security.verify_password("pa55word", hashed) is True
        assert security.verify_password("wrong", hashed) is False
        assert security.needs_rehash(hashed) is False

    def test_plaintext_needs_rehash(self):
        """Plaintext entries verify but are deprecated."""
        security = SecurityManager()
        assert security.verify_password("secret42", "secret42") is True
        assert security.needs_rehash("secret42") is True

    def test_empty_password(self):
        """Empty passwords never verify and cannot be hashed."""
        security = SecurityManager()
        assert security.verify_password("", "secret42") is False
        with pytest.raises(ValueError):
            security.hash_password("")
