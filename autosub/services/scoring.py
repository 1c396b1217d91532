"""Synchronisation scoring for subtitle candidates.

Every weight and token catalogue lives on an immutable :class:`ScoringPolicy`
so the scorer stays a pure function of (candidate, request, policy).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Dict, Optional, Tuple

from autosub.constants import (
    FLAT_RELEASE_TAGS,
    FRAME_RATE_LITERALS,
    HEARING_IMPAIRED_MARKERS,
    MACHINE_TRANSLATION_MARKERS,
    ORIGIN_PRIMARY,
    RELEASE_GROUP_TOKENS,
    RELEASE_TYPE_GROUPS,
)
from autosub.models import RequestContext, SubtitleCandidate

TYPE_MATCHING_GROUPED = "grouped"
TYPE_MATCHING_FLAT = "flat"


@dataclass(frozen=True)
class ScoringPolicy:
    type_matching: str = TYPE_MATCHING_GROUPED
    rank_baseline: bool = True
    rank_baseline_start: int = 100
    hash_bonus: int = 500
    hash_requires_top_rank: bool = True
    group_bonus: int = 80
    type_match_bonus: int = 50
    type_mismatch_penalty: int = -30
    fps_bonus: int = 25
    machine_penalty: int = -20
    sdh_penalty: int = -2
    release_type_groups: Tuple[Tuple[str, Tuple[str, ...]], ...] = tuple(RELEASE_TYPE_GROUPS.items())
    flat_release_tags: Tuple[str, ...] = FLAT_RELEASE_TAGS
    release_group_tokens: Tuple[str, ...] = RELEASE_GROUP_TOKENS
    frame_rate_literals: Tuple[str, ...] = FRAME_RATE_LITERALS


PRESETS: Dict[str, ScoringPolicy] = {
    "grouped": ScoringPolicy(),
    "flat": ScoringPolicy(
        type_matching=TYPE_MATCHING_FLAT,
        rank_baseline=False,
        hash_bonus=15,
        hash_requires_top_rank=False,
        group_bonus=0,
        type_match_bonus=20,
        type_mismatch_penalty=-10,
        fps_bonus=0,
        machine_penalty=-50,
        sdh_penalty=-2,
    ),
}


def build_policy(preset: str, overrides: Optional[dict] = None) -> ScoringPolicy:
    """Return the named preset with weight overrides applied.

    Unknown preset names fall back to ``grouped``.
    """
    policy = PRESETS.get((preset or "").lower(), PRESETS["grouped"])
    if overrides:
        policy = replace(policy, **overrides)
    return policy


@lru_cache(maxsize=512)
def _token_pattern(token: str) -> re.Pattern:
    return re.compile(rf"(?<![a-z0-9]){re.escape(token)}(?![a-z0-9])")


def has_token(text: str, token: str) -> bool:
    """Token-boundary containment, so ``ts`` does not match ``subtitles``."""
    return bool(text) and _token_pattern(token).search(text) is not None


def release_type_group(text: str, policy: ScoringPolicy) -> Optional[str]:
    for group, tokens in policy.release_type_groups:
        if any(has_token(text, token) for token in tokens):
            return group
    return None


def _grouped_type_score(filename: str, text: str, policy: ScoringPolicy) -> int:
    file_group = release_type_group(filename, policy)
    if file_group is None:
        return 0
    candidate_groups = {
        group
        for group, tokens in policy.release_type_groups
        if any(has_token(text, token) for token in tokens)
    }
    if file_group in candidate_groups:
        return policy.type_match_bonus
    if candidate_groups:
        return policy.type_mismatch_penalty
    return 0


def _flat_type_score(filename: str, text: str, policy: ScoringPolicy) -> int:
    score = 0
    for tag in policy.flat_release_tags:
        if tag not in text:
            continue
        if tag in filename:
            score += policy.type_match_bonus
        else:
            score += policy.type_mismatch_penalty
    return score


def score_candidate(
    candidate: SubtitleCandidate,
    context: RequestContext,
    policy: ScoringPolicy,
    primary_rank: Optional[int] = None,
) -> int:
    """Additive score for one candidate.

    ``primary_rank`` is the position among primary-origin candidates left after
    language filtering; the hash gate uses it, falling back to ``original_rank``.
    """
    text = candidate.text
    filename = context.normalized_filename or ""

    score = 0
    if policy.rank_baseline:
        score = policy.rank_baseline_start - candidate.original_rank

    if policy.type_matching == TYPE_MATCHING_FLAT:
        score += _flat_type_score(filename, text, policy)
    else:
        score += _grouped_type_score(filename, text, policy)

    if filename:
        for token in policy.release_group_tokens:
            if has_token(filename, token) and has_token(text, token):
                score += policy.group_bonus
        for literal in policy.frame_rate_literals:
            if literal in filename and literal in text:
                score += policy.fps_bonus

    if any(marker in text for marker in HEARING_IMPAIRED_MARKERS):
        score += policy.sdh_penalty
    if any(marker in text for marker in MACHINE_TRANSLATION_MARKERS):
        score += policy.machine_penalty

    if context.content_hash and candidate.origin == ORIGIN_PRIMARY:
        hash_rank = candidate.original_rank if primary_rank is None else primary_rank
        if not policy.hash_requires_top_rank or hash_rank == 0:
            score += policy.hash_bonus

    return score
