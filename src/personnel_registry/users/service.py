from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import optional_text, require_non_empty, require_password, require_service_number
from ..core.enums import NextStep
from ..core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    ProfileNotModifiedError,
    UnknownUserError,
    UserNotFoundError,
)
from .model import PROFILE_FORM_FIELDS, LoginResult, ProfileFields, PublicProfile
from .passwords import PasswordHasher
from .repository import PersonnelRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: register and authenticate (login)."""

    def __init__(self, personnel: PersonnelRepository, hasher: PasswordHasher):
        self._personnel = personnel
        self._hasher = hasher

    def register(self, service_number: Optional[str], password: Optional[str]) -> str:
        service_number = require_service_number(service_number)
        password = require_password(password)

        if self._personnel.get_by_service_number(service_number):
            raise DuplicateUserError("Personnel with this Service Number already exists")

        # A concurrent registration can still slip past the lookup above;
        # the store's unique key makes create() raise DuplicateUserError then.
        self._personnel.create(service_number=service_number, password_hash=self._hasher.hash(password))
        logger.info("registered service number %s", service_number)
        return service_number

    def authenticate(self, service_number: Optional[str], password: Optional[str]) -> LoginResult:
        service_number = require_non_empty(service_number, "Service Number")
        password = require_password(password)

        record = self._personnel.get_by_service_number(service_number)
        if not record:
            raise UnknownUserError("Service Number is not registered. Please sign up first.")

        if not self._hasher.verify(record.password_hash, password):
            logger.info("failed login for %s", service_number)
            raise InvalidCredentialsError("Incorrect password. Please try again.")

        next_step = NextStep.PROFILE if record.profile_complete else NextStep.CREATE_PROFILE
        return LoginResult(service_number=record.service_number, next_step=next_step)


def profile_from_form(form: Mapping[str, Any]) -> ProfileFields:
    """Build ProfileFields from submitted form/JSON keys (firstname, surname, ...)."""
    values = {attr: optional_text(form.get(key), key) for key, attr in PROFILE_FORM_FIELDS.items()}
    return ProfileFields(**values)


class ProfileService:
    """Use cases: complete the profile and display it."""

    def __init__(self, personnel: PersonnelRepository):
        self._personnel = personnel

    def create_profile(self, service_number: Optional[str], profile: ProfileFields) -> PublicProfile:
        service_number = require_non_empty(service_number, "Service Number")
        require_non_empty(profile.first_name, "First name")
        require_non_empty(profile.surname, "Surname")

        result = self._personnel.update_profile(service_number=service_number, profile=profile)
        logger.debug("profile update for %s: %s", service_number, result)

        if result.matched == 0:
            raise UserNotFoundError(f"Could not find profile for service number: {service_number}")
        if result.modified == 0:
            raise ProfileNotModifiedError("Profile update matched the record but no data changed")

        logger.info("profile completed for %s", service_number)
        return self.get_profile(service_number)

    def get_profile(self, service_number: Optional[str]) -> PublicProfile:
        service_number = require_non_empty(service_number, "Service Number")
        record = self._personnel.get_by_service_number(service_number)
        if not record:
            raise UserNotFoundError(f"Could not find profile for service number: {service_number}")
        return PublicProfile.from_record(record)
