from __future__ import annotations

from personnel_registry.users.passwords import PasswordHasher


def test_hash_is_salted_and_verifies(hasher):
    first = hasher.hash("abc123")
    second = hasher.hash("abc123")

    assert first != "abc123"
    assert first != second
    assert hasher.verify(first, "abc123")
    assert hasher.verify(second, "abc123")
    assert not hasher.verify(first, "abc1234")


def test_method_is_fixed_in_hash():
    hasher = PasswordHasher(method="pbkdf2:sha256:1000")
    assert hasher.hash("pw").startswith("pbkdf2:sha256:1000$")


def test_garbage_hash_does_not_verify(hasher):
    assert not hasher.verify("CHANGE_ME", "CHANGE_ME")
