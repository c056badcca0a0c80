"""Tests for YouTube URL detection and share-link cleanup."""

import pytest

from linkscribe.links import clean_video_url, is_youtube_url


def test_valid_youtube_watch_url_returns_true() -> None:
    """https://www.youtube.com/watch?v=... is valid."""
    assert is_youtube_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ") is True


def test_valid_youtu_be_short_url_returns_true() -> None:
    """https://youtu.be/... is valid."""
    assert is_youtube_url("https://youtu.be/dQw4w9WgXcQ") is True


def test_mobile_youtube_url_returns_true() -> None:
    assert is_youtube_url("https://m.youtube.com/watch?v=dQw4w9WgXcQ") is True


def test_tiktok_url_returns_false() -> None:
    assert is_youtube_url("https://www.tiktok.com/@a/video/1") is False


def test_not_a_url_returns_false() -> None:
    """Plain string that is not a URL returns False."""
    assert is_youtube_url("not-a-url") is False


def test_empty_string_returns_false() -> None:
    """Empty string returns False."""
    assert is_youtube_url("") is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (
            "  https://www.tiktok.com/@a/video/1?is_from_webapp=1&sender_device=pc  ",
            "https://www.tiktok.com/@a/video/1",
        ),
        (
            "https://www.youtube.com/watch?v=abc123&t=42s&si=share",
            "https://www.youtube.com/watch?v=abc123",
        ),
        ("https://youtu.be/abc123?si=share", "https://youtu.be/abc123"),
        ("https://www.instagram.com/reel/XYZ/#comments", "https://www.instagram.com/reel/XYZ/"),
        ("tiktok.com/@a/video/1", "https://tiktok.com/@a/video/1"),
        ("HTTPS://WWW.YOUTUBE.COM/watch?v=AbC", "https://www.youtube.com/watch?v=AbC"),
    ],
)
def test_clean_video_url(raw: str, expected: str) -> None:
    assert clean_video_url(raw) == expected


def test_clean_video_url_keeps_empty_input_empty() -> None:
    assert clean_video_url("   ") == ""
