"""
Tests for password hashing and the password policy.
"""

import pytest

from kazi.services.credentials import hash_password, is_strong_password, verify_password


class TestHashing:
    """bcrypt hashing and verification."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("Str0ng!Pass", rounds=4)
        assert hashed != "Str0ng!Pass"
        assert hashed.startswith("$2")

    def test_same_password_gets_different_salts(self):
        assert hash_password("Str0ng!Pass", rounds=4) != hash_password("Str0ng!Pass", rounds=4)

    def test_verify_accepts_correct_password(self):
        hashed = hash_password("Str0ng!Pass", rounds=4)
        assert verify_password("Str0ng!Pass", hashed) is True

    def test_verify_rejects_wrong_password(self):
        hashed = hash_password("Str0ng!Pass", rounds=4)
        assert verify_password("str0ng!pass", hashed) is False

    def test_verify_rejects_empty_inputs(self):
        hashed = hash_password("Str0ng!Pass", rounds=4)
        assert verify_password("", hashed) is False
        assert verify_password("Str0ng!Pass", "") is False

    def test_cost_defaults_to_configured_rounds(self):
        assert hash_password("Str0ng!Pass").split("$")[2] == "04"
        assert hash_password("Str0ng!Pass", rounds=5).split("$")[2] == "05"

    def test_verify_rejects_non_bcrypt_hash(self):
        assert verify_password("Str0ng!Pass", "not-a-hash") is False

    def test_empty_password_cannot_be_hashed(self):
        with pytest.raises(ValueError):
            hash_password("")

    def test_default_rounds_come_from_settings(self):
        # BCRYPT_ROUNDS=4 in the test environment
        assert hash_password("Str0ng!Pass").startswith("$2b$04$")


class TestPasswordPolicy:
    """Complexity rules for password changes."""

    @pytest.mark.parametrize("password", ["Str0ng!Pass", "Aa1!aaaa", "C0mpl3x_Passw0rd"])
    def test_strong_passwords(self, password):
        assert is_strong_password(password)

    @pytest.mark.parametrize(
        "password",
        [
            "",
            "Sh0rt!",        # too short
            "nouppercase1!",
            "NOLOWERCASE1!",
            "NoDigits!!",
            "NoSpecial123",
        ],
    )
    def test_weak_passwords(self, password):
        assert not is_strong_password(password)
