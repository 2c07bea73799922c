"""Shared fixtures: SQLite database, temporary public dir, HTTP client."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="marble-tests-"))

# Settings are read once at import time
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TMP / 'test.db'}"
os.environ["STORAGE_PUBLIC_DIR"] = str(_TMP / "public")
os.environ["INGEST_EXTRACT_TEXT"] = "false"
os.environ["ENVIRONMENT"] = "testing"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from marble.api import app  # noqa: E402
from marble.config import settings  # noqa: E402
from marble.db import AsyncSessionMaker, reset_tables  # noqa: E402


@pytest.fixture(autouse=True)
async def clean_database():
    await reset_tables()
    yield


@pytest.fixture
async def session():
    async with AsyncSessionMaker() as session:
        yield session


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def public_dir() -> Path:
    return Path(settings.storage.public_dir)


class FakeRasterizer:
    """Stands in for poppler: writes small fake JPEG files.

    Pages are written in reverse so callers must sort them.
    """

    def __init__(self, pages: int = 3):
        self.pages = pages
        self.calls: list[Path] = []
        self.error: Exception | None = None

    def __call__(self, pdf_path, output_dir, options=None):
        self.calls.append(Path(pdf_path))
        if self.error is not None:
            raise self.error
        output_dir.mkdir(parents=True, exist_ok=True)
        prefix = options.prefix if options else "page"
        written = []
        for number in reversed(range(1, self.pages + 1)):
            path = output_dir / f"{prefix}0001-{number:02d}.jpg"
            path.write_bytes(b"\xff\xd8\xff\xe0fake\xff\xd9")
            written.append(path)
        return written


@pytest.fixture
def fake_rasterizer(monkeypatch) -> FakeRasterizer:
    fake = FakeRasterizer()
    monkeypatch.setattr("marble.pipelines.pdf_products.rasterize_pdf", fake)
    return fake


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.4\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF\n"


def build_text_pdf(lines: list[str]) -> bytes:
    """One-page PDF with each line drawn in Helvetica."""
    drawn = " ".join(f"({line}) Tj 0 -30 Td" for line in lines)
    stream = f"BT /F1 18 Tf 72 720 Td {drawn} ET"
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        "/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream",
    ]

    out = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode()
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref}\n%%EOF\n".encode()
    return out


@pytest.fixture
def catalog_pdf_bytes() -> bytes:
    return build_text_pdf(["Rosso Levanto", "Blanco Ibiza"])


@pytest.fixture
def extract_text_enabled(monkeypatch):
    monkeypatch.setattr(settings.ingest, "extract_text", True)
