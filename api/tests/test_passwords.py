"""Tests for password hashing."""

from __future__ import annotations

from werkzeug.security import generate_password_hash

from flagleague.services.passwords import hash_password, verify_password


class TestPasswordHashing:
    def test_round_trip(self) -> None:
        encoded = hash_password("tochito2025")
        assert verify_password("tochito2025", encoded)
        assert not verify_password("tochito2026", encoded)

    def test_uses_scrypt(self) -> None:
        method, salt, digest = hash_password("secret").split("$", 2)
        assert method.startswith("scrypt")
        assert salt
        assert digest

    def test_salted(self) -> None:
        assert hash_password("same") != hash_password("same")

    def test_accepts_other_werkzeug_methods(self) -> None:
        encoded = generate_password_hash("secret", method="pbkdf2:sha256")
        assert verify_password("secret", encoded)

    def test_malformed_hash_never_matches(self) -> None:
        assert not verify_password("secret", "")
        assert not verify_password("secret", "scrypt")
        assert not verify_password("secret", "bogus$salt$digest")
