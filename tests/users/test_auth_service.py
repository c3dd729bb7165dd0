from __future__ import annotations

import pytest

from personnel_registry.core.enums import NextStep
from personnel_registry.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UnknownUserError,
    ValidationError,
)
from personnel_registry.users.model import ProfileFields
from personnel_registry.users.service import AuthService


def test_register_stores_hash_only(personnel, hasher):
    auth = AuthService(personnel, hasher)

    assert auth.register("12345", "abc123") == "12345"

    rec = personnel.get_by_service_number("12345")
    assert rec is not None
    assert rec.password_hash != "abc123"
    assert rec.profile_complete is False
    assert rec.profile == ProfileFields()
    assert rec.photo_path is None


def test_register_twice_keeps_one_record(personnel, hasher):
    auth = AuthService(personnel, hasher)
    auth.register("12345", "abc123")

    with pytest.raises(DuplicateUserError):
        auth.register("12345", "other")

    assert list(personnel.records) == ["12345"]
    assert personnel.create_calls == 1


def test_register_race_uses_store_uniqueness(personnel, hasher):
    class StaleLookup:
        """Lookup misses, as if a concurrent request inserted in between."""

        def get_by_service_number(self, service_number):
            return None

        def create(self, *, service_number, password_hash):
            personnel.create(service_number=service_number, password_hash=password_hash)

    personnel.create(service_number="777", password_hash="x")
    auth = AuthService(StaleLookup(), hasher)

    with pytest.raises(DuplicateUserError):
        auth.register("777", "pw")
    assert len(personnel.records) == 1


@pytest.mark.parametrize("svc_no, password", [("", "pw"), ("   ", "pw"), (None, "pw"), ("1", ""), ("1", None)])
def test_register_requires_both_fields(personnel, hasher, svc_no, password):
    auth = AuthService(personnel, hasher)
    with pytest.raises(ValidationError):
        auth.register(svc_no, password)
    assert personnel.records == {}


def test_login_routes_by_profile_completion(personnel, hasher):
    auth = AuthService(personnel, hasher)
    auth.register("12345", "abc123")

    first = auth.authenticate("12345", "abc123")
    assert first.service_number == "12345"
    assert first.next_step == NextStep.CREATE_PROFILE

    personnel.update_profile(service_number="12345", profile=ProfileFields(first_name="A", surname="B"))

    second = auth.authenticate("12345", "abc123")
    assert second.next_step == NextStep.PROFILE


def test_login_wrong_password(personnel, hasher):
    auth = AuthService(personnel, hasher)
    auth.register("12345", "abc123")

    with pytest.raises(InvalidCredentialsError):
        auth.authenticate("12345", "abc124")


def test_login_unknown_user(personnel, hasher):
    auth = AuthService(personnel, hasher)

    with pytest.raises(UnknownUserError):
        auth.authenticate("99999", "abc123")


@pytest.mark.parametrize("svc_no", ["../12345", "NN/1234", "Ä1", ".hidden", "a b"])
def test_register_rejects_service_numbers_that_alias_a_file_name(personnel, hasher, svc_no):
    auth = AuthService(personnel, hasher)

    with pytest.raises(ValidationError):
        auth.register(svc_no, "pw")
    assert personnel.records == {}


def test_colliding_service_numbers_cannot_both_register(personnel, hasher):
    auth = AuthService(personnel, hasher)
    auth.register("NN_1234", "pw")

    with pytest.raises(ValidationError):
        auth.register("NN/1234", "pw")
    assert list(personnel.records) == ["NN_1234"]


def test_numeric_password_is_accepted_as_text(personnel, hasher):
    auth = AuthService(personnel, hasher)
    auth.register(12345, 123456)

    assert auth.authenticate("12345", "123456").service_number == "12345"


@pytest.mark.parametrize("password", [["abc"], {"p": 1}, True])
def test_non_text_password_is_a_validation_error(personnel, hasher, password):
    auth = AuthService(personnel, hasher)

    with pytest.raises(ValidationError):
        auth.register("12345", password)
