from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import UploadRejectedError, UserNotFoundError
from ..users.model import PublicProfile
from ..users.repository import PersonnelRepository
from .storage import PhotoStorage

logger = logging.getLogger(__name__)


class PhotoService:
    """Use case: associate an uploaded photo with a personnel record."""

    def __init__(self, personnel: PersonnelRepository, storage: PhotoStorage):
        self._personnel = personnel
        self._storage = storage

    def attach_photo(
        self,
        service_number: Optional[str],
        stream: Optional[BinaryIO],
        original_filename: Optional[str],
    ) -> PublicProfile:
        service_number = require_non_empty(service_number, "Service Number")
        if stream is None:
            raise UploadRejectedError("No file was uploaded.")

        if not self._personnel.get_by_service_number(service_number):
            raise UserNotFoundError(f"Could not find profile for service number: {service_number}")

        photo_path = self._storage.save(service_number, stream, original_filename)
        result = self._personnel.set_photo_path(service_number=service_number, photo_path=photo_path)

        if result.matched == 0:
            # Record disappeared between the lookup and the update.
            logger.warning("no record for %s after storing %s; removing orphan", service_number, photo_path)
            self._storage.remove(photo_path)
            raise UserNotFoundError(f"Could not find profile for service number: {service_number}")

        # modified == 0 is a re-upload to the same path, which is fine.
        record = self._personnel.get_by_service_number(service_number)
        if not record:
            raise UserNotFoundError(f"Could not find profile for service number: {service_number}")
        return PublicProfile.from_record(record)
