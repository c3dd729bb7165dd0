from __future__ import annotations

from enum import Enum


class NextStep(str, Enum):
    """Where the client goes after a successful login."""

    PROFILE = "profile"
    CREATE_PROFILE = "create_profile"
