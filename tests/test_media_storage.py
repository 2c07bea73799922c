from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from marble import storage
from marble.media import is_video_link, video_embed_url, video_thumbnail_url
from marble.storage import (
    MediaKind,
    StorageError,
    media_kind_for,
    public_url,
    save_upload,
    unique_filename,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
        ("https://vimeo.com/76979871", "https://player.vimeo.com/video/76979871"),
        ("https://example.com/video.mp4", None),
        (None, None),
    ],
)
def test_video_embed_url(url, expected):
    assert video_embed_url(url) == expected


def test_video_thumbnail_url():
    assert video_thumbnail_url("https://youtu.be/dQw4w9WgXcQ") == (
        "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
    )
    assert video_thumbnail_url("https://vimeo.com/76979871") == "https://vumbnail.com/76979871.jpg"
    assert video_thumbnail_url("https://example.com/v.mp4") is None
    assert not is_video_link("https://example.com/v.mp4")


def test_media_kind_for_routes_by_mime():
    assert media_kind_for("application/pdf") is MediaKind.PDFS
    assert media_kind_for("video/mp4") is MediaKind.VIDEOS
    assert media_kind_for("image/png") is MediaKind.IMAGES
    assert media_kind_for(None) is MediaKind.IMAGES


def test_unique_filename_keeps_extension():
    name = unique_filename("Blanco Ibiza.JPG")
    stamp, rand = name[: -len(".JPG")].split("-")
    assert name.endswith(".JPG")
    assert stamp.isdigit() and rand.isdigit()
    assert unique_filename(None).count(".") == 0


async def test_save_upload_writes_under_public_dir(public_dir):
    upload = UploadFile(
        file=BytesIO(b"%PDF-1.4 brochure"),
        filename="brochure.pdf",
        headers=Headers({"content-type": "application/pdf"}),
    )

    url = await save_upload(upload, "products")

    assert url.startswith("/pdfs/products/")
    assert url.endswith(".pdf")
    assert (public_dir / url.lstrip("/")).read_bytes() == b"%PDF-1.4 brochure"


def test_public_url_is_relative_to_public_dir(public_dir):
    path = public_dir / "images" / "news" / "a.jpg"
    assert public_url(path) == "/images/news/a.jpg"


async def test_save_upload_unwritable_folder_raises_storage_error(monkeypatch):
    def no_space(kind, entity):
        raise OSError("No space left on device")

    monkeypatch.setattr(storage, "entity_dir", no_space)
    upload = UploadFile(
        file=BytesIO(b"jpeg"),
        filename="slab.jpg",
        headers=Headers({"content-type": "image/jpeg"}),
    )

    with pytest.raises(StorageError, match="No space left"):
        await save_upload(upload, "products")
