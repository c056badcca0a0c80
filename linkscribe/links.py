"""Video link helpers: YouTube detection and share-link cleanup."""

import re
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

# Allow youtube.com (with optional www./m.) and youtu.be
_YOUTUBE_HOST_PATTERN = re.compile(
    r"^https?://((www|m)\.)?(youtube\.com|youtu\.be)/",
    re.IGNORECASE,
)


def is_youtube_url(url: str) -> bool:
    """Return True if url is a YouTube URL (youtube.com or youtu.be), else False."""
    if not url or not url.strip():
        return False
    return bool(_YOUTUBE_HOST_PATTERN.match(url.strip()))


def clean_video_url(raw_url: str) -> str:
    """Normalize a pasted share link into the URL the transcription step is seeded with.

    Drops the fragment and all query parameters (share/tracking ids), except the
    ``v`` parameter of a YouTube watch URL. A missing scheme becomes https.
    """
    url = (raw_url or "").strip()
    if not url:
        return ""
    if "://" not in url:
        url = f"https://{url}"

    parts = urlsplit(url)
    query = ""
    if is_youtube_url(url) and parts.path.rstrip("/") == "/watch":
        video_ids = parse_qs(parts.query).get("v")
        if video_ids:
            query = urlencode({"v": video_ids[0]})
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, query, ""))
