"""
Utility functions for playlist-facets.

This module provides small helpers used across the application:
    - Playlist input parsing (raw ID or share URL)
    - Path helpers
    - Display formatting

Usage:
    from playlist_facets.utils import parse_playlist_input, ensure_directory
"""

from pathlib import Path
from urllib.parse import parse_qs, urlparse


def parse_playlist_input(value: str) -> str:
    """
    Extract the working playlist ID from user input.

    Accepts either a raw ID or a playlist URL carrying an 'id' query
    parameter. Share links of the web player keep the query inside the
    fragment ("https://music.163.com/#/playlist?id=123"), so the fragment
    is searched too. Input that is not a URL, or a URL without a usable
    'id', is returned as typed (stripped of surrounding whitespace).

    Args:
        value: Text typed by the user.

    Returns:
        The playlist ID to fetch.

    Examples:
        parse_playlist_input("24381616")
        # "24381616"
        parse_playlist_input("https://music.163.com/playlist?id=24381616&uid=1")
        # "24381616"
        parse_playlist_input("https://music.163.com/#/playlist?id=24381616")
        # "24381616"
        parse_playlist_input("https://[broken")
        # "https://[broken"
    """
    text = value.strip()
    if "://" not in text:
        return text

    try:
        parsed = urlparse(text)
        ids = parse_qs(parsed.query).get("id")
        if not ids and parsed.fragment:
            ids = parse_qs(urlparse(parsed.fragment).query).get("id")
    except ValueError:
        # Malformed URL: treat the input as the ID itself
        return text

    if ids and ids[0].strip():
        return ids[0].strip()
    return text


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory.

    Returns:
        The same path (for chaining).

    Raises:
        OSError: If directory cannot be created (permissions, etc.)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_percentage(current: int, total: int) -> str:
    """
    Format completion as a percentage with one decimal.

    Examples:
        format_percentage(1, 3)  # "33.3%"
        format_percentage(0, 0)  # "0.0%"
    """
    if total <= 0:
        return "0.0%"
    return f"{current / total * 100:.1f}%"
