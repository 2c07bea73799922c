"""Video link helpers for news posts (YouTube and Vimeo)."""
from __future__ import annotations

import re

YOUTUBE_ID = re.compile(
    r'(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^"&?/\s]{11})'
)
VIMEO_ID = re.compile(r'vimeo\.com/(?:.*/)?(\d+)')


def video_embed_url(url: str | None) -> str | None:
    """Player URL for a video link, or None if the host is not supported."""
    if not url:
        return None

    match = YOUTUBE_ID.search(url)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"

    match = VIMEO_ID.search(url)
    if match:
        return f"https://player.vimeo.com/video/{match.group(1)}"

    # Known host but unrecognised path: embed as given
    if any(host in url for host in ("youtube.com", "youtu.be", "vimeo.com")):
        return url

    return None


def video_thumbnail_url(url: str | None) -> str | None:
    if not url:
        return None

    match = YOUTUBE_ID.search(url)
    if match:
        return f"https://img.youtube.com/vi/{match.group(1)}/maxresdefault.jpg"

    match = VIMEO_ID.search(url)
    if match:
        return f"https://vumbnail.com/{match.group(1)}.jpg"

    return None


def is_video_link(url: str | None) -> bool:
    return video_embed_url(url) is not None
