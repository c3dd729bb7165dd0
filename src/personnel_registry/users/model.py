from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from ..core.enums import NextStep


# Form key -> ProfileFields attribute.
PROFILE_FORM_FIELDS: Dict[str, str] = {
    "firstname": "first_name",
    "middlename": "middle_name",
    "surname": "surname",
    "svcname": "service_name",
    "raterank": "rate_rank",
    "dob": "date_of_birth",
    "bloodgroup": "blood_group",
    "maritalstatus": "marital_status",
    "gender": "gender",
    "email": "email",
    "phone": "phone",
    "currentship": "current_ship",
    "specialization": "specialization",
    "branch": "branch",
    "yrcommissioning": "year_of_commissioning",
    "course": "course",
}


@dataclass(frozen=True)
class ProfileFields:
    """The fixed set of personal fields written by one profile update."""

    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    surname: Optional[str] = None
    service_name: Optional[str] = None
    rate_rank: Optional[str] = None
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    marital_status: Optional[str] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    current_ship: Optional[str] = None
    specialization: Optional[str] = None
    branch: Optional[str] = None
    year_of_commissioning: Optional[str] = None
    course: Optional[str] = None

    @classmethod
    def column_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ProfileFields":
        return cls(**{name: row.get(name) for name in cls.column_names()})

    def as_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


@dataclass(frozen=True)
class PersonnelRecord:
    """Domain entity: one registered person.

    Plain data object (no DB access code). Holds the password hash, so it
    never leaves the service layer; use PublicProfile for anything
    outward-facing.
    """

    service_number: str
    password_hash: str
    profile_complete: bool = False
    profile: ProfileFields = ProfileFields()
    photo_path: Optional[str] = None


@dataclass(frozen=True)
class PublicProfile:
    """Outward-facing view of a PersonnelRecord. Has no password field at all."""

    service_number: str
    profile_complete: bool
    profile: ProfileFields
    photo_path: Optional[str]

    @classmethod
    def from_record(cls, record: PersonnelRecord) -> "PublicProfile":
        return cls(
            service_number=record.service_number,
            profile_complete=record.profile_complete,
            profile=record.profile,
            photo_path=record.photo_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "service_number": self.service_number,
            "profile_complete": self.profile_complete,
            "photo_path": self.photo_path,
        }
        out.update(self.profile.as_dict())
        return out


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an atomic single-record update."""

    matched: int
    modified: int


@dataclass(frozen=True)
class LoginResult:
    service_number: str
    next_step: NextStep
