"""Request-scoped records flowing through the ranking pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from autosub.constants import ORIGIN_MARKERS, ORIGIN_UNKNOWN


def classify_origin(source_url: str) -> str:
    lowered = (source_url or "").lower()
    for marker, origin in ORIGIN_MARKERS:
        if marker in lowered:
            return origin
    return ORIGIN_UNKNOWN


@dataclass(frozen=True)
class SubtitleCandidate:
    """One upstream subtitle entry, tagged with where it came from."""

    identifier: str
    location_url: str
    language_code: str
    origin: str
    original_rank: int
    source_url: str = ""
    payload: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, entry: Any, source_url: str, rank: int) -> Optional["SubtitleCandidate"]:
        """Validate an upstream entry; return None when it cannot be used."""
        if not isinstance(entry, dict):
            return None
        identifier = entry.get("id")
        url = entry.get("url")
        if isinstance(identifier, (int, float)) and not isinstance(identifier, bool):
            identifier = str(identifier)
        if not isinstance(identifier, str) or not identifier:
            return None
        if not isinstance(url, str) or not url:
            return None
        lang = entry.get("lang")
        return cls(
            identifier=identifier,
            location_url=url,
            language_code=lang if isinstance(lang, str) else "",
            origin=classify_origin(source_url),
            original_rank=rank,
            source_url=source_url,
            payload=dict(entry),
        )

    @property
    def text(self) -> str:
        return f"{self.identifier} {self.location_url}".lower()


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: SubtitleCandidate
    score: int


@dataclass(frozen=True)
class RequestContext:
    target_language: str
    substitute_language: str
    source_urls: Tuple[str, ...]
    media_type: str
    media_id: str
    content_hash: Optional[str] = None
    normalized_filename: Optional[str] = None
