from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Auto-Sub application settings.

    All settings can be overridden via environment variables or .env file.
    Environment variables use uppercase names (e.g., OUTPUT_MODE=top3).

    Output modes:
        best = return only the single highest scoring subtitle
        top3 = return the three highest scoring subtitles

    Scoring presets:
        grouped = release types compared by family, hash match dominates
        flat    = per-tag release matching of the original single-winner addon
    """
    host: str = "0.0.0.0"
    port: int = 7000
    addon_version: str = "4.0.0"

    default_language: str = "eng"
    default_spoof_language: str = "mri"
    default_source_url: str = "https://opensubtitles-v3.strem.io"
    upstream_timeout: float = 5.0

    output_mode: Literal["best", "top3"] = "best"
    scoring_preset: Literal["grouped", "flat"] = "grouped"

    # Per-weight overrides on top of the preset (None keeps the preset value)
    score_hash_bonus: Optional[int] = None
    score_group_bonus: Optional[int] = None
    score_type_match_bonus: Optional[int] = None
    score_type_mismatch_penalty: Optional[int] = None
    score_fps_bonus: Optional[int] = None
    score_machine_penalty: Optional[int] = None
    score_sdh_penalty: Optional[int] = None
    score_rank_baseline: Optional[bool] = None
    score_rank_baseline_start: Optional[int] = None
    score_hash_requires_top_rank: Optional[bool] = None
    min_score: Optional[int] = None

    log_level: str = "INFO"
    json_logs: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def score_overrides(self) -> dict:
        """Return the non-empty SCORE_* overrides keyed by policy field name."""
        overrides = {
            "hash_bonus": self.score_hash_bonus,
            "group_bonus": self.score_group_bonus,
            "type_match_bonus": self.score_type_match_bonus,
            "type_mismatch_penalty": self.score_type_mismatch_penalty,
            "fps_bonus": self.score_fps_bonus,
            "machine_penalty": self.score_machine_penalty,
            "sdh_penalty": self.score_sdh_penalty,
            "rank_baseline": self.score_rank_baseline,
            "rank_baseline_start": self.score_rank_baseline_start,
            "hash_requires_top_rank": self.score_hash_requires_top_rank,
        }
        return {key: value for key, value in overrides.items() if value is not None}


settings = Settings()
