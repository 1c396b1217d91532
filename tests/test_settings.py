import pytest
from pydantic import ValidationError

from autosub.services.scoring import PRESETS, build_policy
from autosub.settings import Settings


def test_score_overrides_drop_unset_values():
    assert Settings().score_overrides() == {}
    configured = Settings(score_hash_bonus=1, score_rank_baseline=False)
    assert configured.score_overrides() == {"hash_bonus": 1, "rank_baseline": False}


def test_policy_switches_reach_build_policy():
    configured = Settings(
        score_rank_baseline=False,
        score_rank_baseline_start=50,
        score_hash_requires_top_rank=False,
    )
    policy = build_policy("grouped", configured.score_overrides())
    assert policy.rank_baseline is False
    assert policy.rank_baseline_start == 50
    assert policy.hash_requires_top_rank is False
    assert policy.hash_bonus == PRESETS["grouped"].hash_bonus


def test_policy_switches_read_from_environment(monkeypatch):
    monkeypatch.setenv("SCORE_HASH_REQUIRES_TOP_RANK", "false")
    monkeypatch.setenv("SCORE_RANK_BASELINE_START", "10")
    assert Settings().score_overrides() == {"hash_requires_top_rank": False, "rank_baseline_start": 10}


@pytest.mark.parametrize("field, value", [("output_mode", "Top3"), ("scoring_preset", "nope")])
def test_unknown_mode_or_preset_is_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_mode_and_preset_from_environment(monkeypatch):
    monkeypatch.setenv("OUTPUT_MODE", "top3")
    monkeypatch.setenv("SCORING_PRESET", "flat")
    configured = Settings()
    assert configured.output_mode == "top3"
    assert configured.scoring_preset == "flat"
