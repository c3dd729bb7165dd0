from __future__ import annotations

from dataclasses import replace
from typing import Optional

import cv2
import numpy as np
import pytest

from personnel_registry import create_app
from personnel_registry.container import wire_container
from personnel_registry.core.exceptions import DuplicateUserError
from personnel_registry.users.model import PersonnelRecord, ProfileFields, UpdateResult
from personnel_registry.users.passwords import PasswordHasher

FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class InMemoryPersonnel:
    """Dict-backed PersonnelRepository with the same matched/modified semantics as MySQL."""

    def __init__(self):
        self.records: dict[str, PersonnelRecord] = {}
        self.create_calls = 0

    def get_by_service_number(self, service_number: str) -> Optional[PersonnelRecord]:
        return self.records.get(service_number)

    def create(self, *, service_number: str, password_hash: str) -> None:
        self.create_calls += 1
        if service_number in self.records:
            raise DuplicateUserError("Personnel with this Service Number already exists")
        self.records[service_number] = PersonnelRecord(service_number=service_number, password_hash=password_hash)

    def update_profile(self, *, service_number: str, profile: ProfileFields) -> UpdateResult:
        current = self.records.get(service_number)
        if not current:
            return UpdateResult(matched=0, modified=0)
        updated = replace(current, profile=profile, profile_complete=True)
        if updated == current:
            return UpdateResult(matched=1, modified=0)
        self.records[service_number] = updated
        return UpdateResult(matched=1, modified=1)

    def set_photo_path(self, *, service_number: str, photo_path: str) -> UpdateResult:
        current = self.records.get(service_number)
        if not current:
            return UpdateResult(matched=0, modified=0)
        if current.photo_path == photo_path:
            return UpdateResult(matched=1, modified=0)
        self.records[service_number] = replace(current, photo_path=photo_path)
        return UpdateResult(matched=1, modified=1)


FULL_PROFILE_FORM = {
    "firstname": "Ada",
    "middlename": "K",
    "surname": "Okafor",
    "svcname": "A.K. Okafor",
    "raterank": "Lieutenant",
    "dob": "1990-04-12",
    "bloodgroup": "O+",
    "maritalstatus": "Single",
    "gender": "Female",
    "email": "ada.okafor@example.com",
    "phone": "+2348000000000",
    "currentship": "NNS Aradu",
    "specialization": "Hydrography",
    "branch": "Operations",
    "yrcommissioning": "2012",
    "course": "DSSC 20",
}


@pytest.fixture
def profile_form() -> dict:
    return dict(FULL_PROFILE_FORM)


@pytest.fixture
def personnel() -> InMemoryPersonnel:
    return InMemoryPersonnel()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture
def png_bytes() -> bytes:
    ok, encoded = cv2.imencode(".png", np.zeros((8, 8, 3), dtype=np.uint8))
    assert ok
    return encoded.tobytes()


@pytest.fixture
def container(personnel, tmp_path):
    return wire_container(
        personnel_repo=personnel,
        upload_folder=tmp_path / "uploads",
        password_hash_method=FAST_HASH_METHOD,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
