from __future__ import annotations

from flask import Flask, redirect, request, send_from_directory, url_for

from ..common.web import require_acting_as, service_number_from
from ..core.constants import PHOTO_FIELD
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/upload-photo", methods=["POST"], endpoint="upload_photo")
    def upload_photo():
        service_number = service_number_from(request.form)
        require_acting_as(service_number)

        upload = request.files.get(PHOTO_FIELD)
        container.photo_service.attach_photo(
            service_number,
            upload.stream if upload else None,
            upload.filename if upload else None,
        )
        return redirect(url_for("profile", svcNo=service_number))

    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_photo")
    def uploaded_photo(filename: str):
        return send_from_directory(container.photo_storage.folder.resolve(), filename)
