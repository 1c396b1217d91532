import base64
import re
import urllib.parse
from typing import List, Optional, Tuple

from autosub.settings import settings

VIDEO_HASH_RE = re.compile(r"videoHash=([^&.]+)")
FILENAME_RE = re.compile(r"filename=([^&]+)")


def decode_base64_url(encoded_url: str) -> str:
    """Decode a base64-encoded URL or return the original if not base64.

    Args:
        encoded_url: Potentially base64-encoded URL string

    Returns:
        Decoded URL string or original if decoding fails
    """
    if not encoded_url or encoded_url.startswith(('http://', 'https://')):
        return encoded_url
    try:
        # Add padding if needed
        padding = '=' * (-len(encoded_url) % 4)
        decoded = base64.urlsafe_b64decode(encoded_url + padding).decode('utf-8')
        # Only return decoded if it looks like a valid URL
        if decoded.startswith(('http://', 'https://')):
            return decoded
        return encoded_url
    except ValueError:
        # Already plain URL or invalid base64
        return encoded_url


def normalize_addon_url(raw_url: str) -> str:
    """Remove trailing manifest.json and slash, preserve query."""
    if not raw_url:
        return raw_url
    try:
        parsed = urllib.parse.urlparse(raw_url)
        path = parsed.path or ""
        if path.endswith("/manifest.json"):
            path = path[: -len("/manifest.json")]
        return parsed._replace(path=path).geturl().rstrip("/")
    except ValueError:
        return raw_url.rstrip("/")


def parse_config(config: str) -> Tuple[str, str, List[str]]:
    """Split a ``lang|spoofLang|url1|url2`` segment into its parts.

    Missing parts fall back to the configured defaults; nothing here raises.
    """
    parts = (config or "").split("|")
    language = parts[0].strip() if parts and parts[0].strip() else settings.default_language
    spoof = parts[1].strip() if len(parts) > 1 and parts[1].strip() else settings.default_spoof_language

    sources = []
    for raw in parts[2:]:
        raw = urllib.parse.unquote(raw).strip()
        if not raw:
            continue
        sources.append(normalize_addon_url(decode_base64_url(raw)))
    if not sources:
        sources = [settings.default_source_url]
    return language, spoof, sources


def extract_metadata(extra: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Pull ``videoHash`` and ``filename`` out of the extra path segment.

    The filename comes back percent-decoded and lower-cased. Bad encodings
    fall back to the raw capture.
    """
    if not extra:
        return None, None

    video_hash = None
    match_hash = VIDEO_HASH_RE.search(extra)
    if match_hash:
        video_hash = match_hash.group(1)

    filename = None
    match_file = FILENAME_RE.search(extra)
    if match_file:
        raw = match_file.group(1)
        try:
            filename = urllib.parse.unquote(raw, errors="strict").lower()
        except UnicodeDecodeError:
            filename = raw.lower()
    return video_hash, filename
