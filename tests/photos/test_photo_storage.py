from __future__ import annotations

import io
from pathlib import Path

import pytest

from personnel_registry.core.exceptions import UploadRejectedError
from personnel_registry.photos.storage import PhotoStorage


def test_save_names_file_by_service_number(tmp_path, png_bytes):
    storage = PhotoStorage(tmp_path / "uploads")

    path = storage.save("NN-1234", io.BytesIO(png_bytes), "Me.PNG")

    assert Path(path).name == "NN-1234.png"
    assert Path(path).read_bytes() == png_bytes


def test_reupload_overwrites(tmp_path, png_bytes):
    storage = PhotoStorage(tmp_path)
    first = storage.save("12345", io.BytesIO(png_bytes), "a.png")
    second = storage.save("12345", io.BytesIO(png_bytes), "b.png")

    assert first == second
    assert sorted(p.name for p in tmp_path.iterdir()) == ["12345.png"]


def test_oversize_rejected_with_413(tmp_path, png_bytes):
    storage = PhotoStorage(tmp_path, max_bytes=len(png_bytes) - 1)

    with pytest.raises(UploadRejectedError) as exc:
        storage.save("12345", io.BytesIO(png_bytes), "a.png")

    assert exc.value.http_status == 413
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_empty_or_malformed_rejected(tmp_path, data):
    storage = PhotoStorage(tmp_path)

    with pytest.raises(UploadRejectedError) as exc:
        storage.save("12345", io.BytesIO(data), "a.png")

    assert exc.value.http_status == 400
    assert list(tmp_path.iterdir()) == []


def test_remove_missing_file_is_noop(tmp_path):
    PhotoStorage(tmp_path).remove(str(tmp_path / "gone.png"))


@pytest.mark.parametrize("svc_no", ["../12345", "NN/1234", "Ä1", "a b", ""])
def test_unsafe_service_numbers_never_reach_disk(tmp_path, png_bytes, svc_no):
    storage = PhotoStorage(tmp_path)

    with pytest.raises(UploadRejectedError):
        storage.save(svc_no, io.BytesIO(png_bytes), "a.png")

    assert list(tmp_path.iterdir()) == []
