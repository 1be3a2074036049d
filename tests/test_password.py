"""Password hashing tests."""

import pytest

from inkwell.auth.password import hash_password, verify_password

PASSWORD = "secret1"


def _single_char_variants(password: str):
    for i, ch in enumerate(password):
        swapped = "x" if ch != "x" else "y"
        yield password[:i] + swapped + password[i + 1:]
        yield password[:i] + password[i + 1:]
    yield password + "!"
    yield password.upper()


def test_hash_is_not_plaintext():
    hashed = hash_password(PASSWORD)
    assert PASSWORD not in hashed
    assert hashed.startswith("$2")


def test_hash_is_salted():
    assert hash_password(PASSWORD) != hash_password(PASSWORD)


def test_original_password_verifies():
    assert verify_password(PASSWORD, hash_password(PASSWORD))


@pytest.mark.parametrize("variant", sorted(set(_single_char_variants(PASSWORD))))
def test_single_character_variants_fail(variant):
    hashed = hash_password(PASSWORD)
    assert not verify_password(variant, hashed)


def test_malformed_hash_never_matches():
    assert not verify_password(PASSWORD, "not-a-bcrypt-hash")


def test_passwords_past_bcrypt_limit_are_refused():
    with pytest.raises(ValueError):
        hash_password("p" * 73)


def test_long_password_never_matches_by_prefix():
    hashed = hash_password("p" * 72)
    assert not verify_password("p" * 72 + "EXTRA", hashed)
