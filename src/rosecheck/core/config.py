# src/rosecheck/core/config.py
"""
Configuration schema and loading for check runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from rosecheck.core.seed import Seed

DEFAULT_MAX_SUCCESS = 100
DEFAULT_MAX_DISCARD = 500
DEFAULT_MAX_SIZE = 100


class ReplaySettings(BaseModel):
    """Seed and size of a previous failure, for deterministic re-runs.

    The first test of a replayed run uses exactly this seed and size, which
    reproduces the failing test case reported by a Failure result.

    Example YAML:
        replay:
          seed: "9e3779b97f4a7c15:bf58476d1ce4e5b9"
          size: 17
    """

    model_config = {"frozen": True, "extra": "forbid"}

    seed: str = Field(description="Seed text as printed by a failure report")
    size: int = Field(ge=0, description="Size used by the failing test")

    @field_validator("seed")
    @classmethod
    def validate_seed_text(cls, v: str) -> str:
        """Reject seed text that cannot be parsed back into a Seed."""
        Seed.parse(v)
        return v.strip()

    @property
    def parsed_seed(self) -> Seed:
        return Seed.parse(self.seed)


class CheckerSettings(BaseModel):
    """Run-loop limits.

    Example YAML:
        max_success: 200
        max_discard: 1000
        max_size: 50
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_success: int = Field(
        default=DEFAULT_MAX_SUCCESS,
        gt=0,
        description="Successful tests needed before the property passes",
    )
    max_discard: int = Field(
        default=DEFAULT_MAX_DISCARD,
        ge=0,
        description="Discarded tests tolerated before giving up (also the existential search bound)",
    )
    max_size: int = Field(
        default=DEFAULT_MAX_SIZE,
        ge=0,
        description="Largest size hint handed to generators",
    )
    replay: ReplaySettings | None = Field(
        default=None,
        description="Replay a previous failure instead of drawing a fresh seed",
    )


def load_settings(config_path: Path | None = None) -> CheckerSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (ROSECHECK_*) - highest priority
    2. Config file (if given)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: ROSECHECK_REPLAY__SIZE for nested keys.

    Args:
        config_path: Optional path to YAML configuration file

    Returns:
        Validated CheckerSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="ROSECHECK",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config: dict[str, Any] = {
        k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys
    }
    return CheckerSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
