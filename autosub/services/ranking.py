from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from autosub.constants import (
    ENGLISH_ALIAS,
    ORIGIN_PRIMARY,
    OUTPUT_CARDINALITY,
    OUTPUT_MODE_BEST,
    OUTPUT_MODE_TOP3,
)
from autosub.models import RequestContext, ScoredCandidate, SubtitleCandidate
from autosub.services.scoring import ScoringPolicy, score_candidate

log = logging.getLogger("autosub.ranking")


def merge_results(results: Iterable[Tuple[str, Sequence[object]]]) -> List[SubtitleCandidate]:
    """Flatten per-source lists into one list, first location URL wins.

    ``results`` holds ``(source_url, entries)`` pairs in source order.
    """
    merged: List[SubtitleCandidate] = []
    seen_urls = set()
    for source_url, entries in results:
        for rank, entry in enumerate(entries):
            candidate = SubtitleCandidate.from_payload(entry, source_url, rank)
            if candidate is None:
                log.debug("Skipping malformed entry #%d from %s", rank, source_url)
                continue
            if candidate.location_url in seen_urls:
                continue
            seen_urls.add(candidate.location_url)
            merged.append(candidate)
    return merged


def matches_language(language_code: str, target_language: str) -> bool:
    if not language_code:
        return False
    if language_code.startswith(target_language):
        return True
    return target_language == "eng" and language_code == ENGLISH_ALIAS


def filter_by_language(candidates: Iterable[SubtitleCandidate], target_language: str) -> List[SubtitleCandidate]:
    return [c for c in candidates if matches_language(c.language_code, target_language)]


def rank_candidates(
    candidates: Iterable[SubtitleCandidate],
    context: RequestContext,
    policy: ScoringPolicy,
) -> List[ScoredCandidate]:
    """Score and sort descending. Equal scores keep merge order (stable sort)."""
    scored: List[ScoredCandidate] = []
    primary_seen = 0
    for candidate in candidates:
        primary_rank = None
        if candidate.origin == ORIGIN_PRIMARY:
            primary_rank = primary_seen
            primary_seen += 1
        scored.append(ScoredCandidate(candidate, score_candidate(candidate, context, policy, primary_rank)))
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def select_results(
    ranked: Sequence[ScoredCandidate],
    substitute_language: str,
    mode: str = OUTPUT_MODE_BEST,
    min_score: Optional[int] = None,
) -> List[dict]:
    """Cut the ranked list down to the mode's size and relabel it for the player."""
    if min_score is not None:
        ranked = [item for item in ranked if item.score >= min_score]
    limit = OUTPUT_CARDINALITY.get(mode, 1)

    final: List[dict] = []
    for position, item in enumerate(ranked[:limit], start=1):
        entry = dict(item.candidate.payload)
        if mode == OUTPUT_MODE_TOP3:
            entry["id"] = f"top{position}_{item.candidate.identifier}"
        else:
            entry["id"] = f"best_{item.candidate.identifier}"
        entry["lang"] = substitute_language
        final.append(entry)
    return final


def build_subtitles(
    source_results: Iterable[Tuple[str, Sequence[object]]],
    context: RequestContext,
    policy: ScoringPolicy,
    mode: str = OUTPUT_MODE_BEST,
    min_score: Optional[int] = None,
) -> List[dict]:
    """Merge, filter, score and select in one pass over the fetched results."""
    merged = merge_results(source_results)
    filtered = filter_by_language(merged, context.target_language)
    ranked = rank_candidates(filtered, context, policy)
    if ranked:
        winner = ranked[0]
        log.info(
            "[%s] Winner: %s (Score: %d, %d/%d candidates)",
            context.media_id,
            winner.candidate.identifier,
            winner.score,
            len(ranked),
            len(merged),
        )
    else:
        log.info("[%s] No %s candidates among %d merged", context.media_id, context.target_language, len(merged))
    return select_results(ranked, context.substitute_language, mode=mode, min_score=min_score)
