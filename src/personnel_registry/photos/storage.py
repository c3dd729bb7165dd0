from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional

import cv2
import numpy as np
from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_MAX_PHOTO_BYTES
from ..core.exceptions import UploadRejectedError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """File intake for profile photos.

    Photos live in one flat directory, named ``<service number><ext>``, so a
    re-upload overwrites the previous photo.
    """

    def __init__(self, upload_folder: str | Path, *, max_bytes: int = DEFAULT_MAX_PHOTO_BYTES):
        self._folder = Path(upload_folder)
        self._max_bytes = int(max_bytes)

    @property
    def folder(self) -> Path:
        return self._folder

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def filename_for(self, service_number: str, original_filename: Optional[str]) -> str:
        # One service number, one file name.
        if not service_number or secure_filename(service_number) != service_number:
            raise UploadRejectedError("Service Number cannot be used as a file name")
        extension = Path(original_filename or "").suffix.lower()
        return f"{service_number}{extension}"

    def save(self, service_number: str, stream: BinaryIO, original_filename: Optional[str]) -> str:
        """Validate and persist an uploaded photo; return the stored path."""
        data = stream.read(self._max_bytes + 1)
        if not data:
            raise UploadRejectedError("No file was uploaded.")
        if len(data) > self._max_bytes:
            limit_mb = self._max_bytes / (1024 * 1024)
            raise UploadRejectedError(f"File is too large (Limit: {limit_mb:g}MB).", too_large=True)

        image = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise UploadRejectedError("Uploaded file is not a valid image.")

        self._folder.mkdir(parents=True, exist_ok=True)
        target = self._folder / self.filename_for(service_number, original_filename)
        tmp = target.with_name(target.name + ".part")
        tmp.write_bytes(data)
        os.replace(tmp, target)

        logger.info("stored photo for %s at %s (%d bytes)", service_number, target, len(data))
        return str(target)

    def remove(self, photo_path: str) -> None:
        try:
            Path(photo_path).unlink()
        except FileNotFoundError:
            return
        logger.info("removed photo %s", photo_path)
