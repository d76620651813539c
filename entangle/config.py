"""
Runtime settings.

Defaults can be overridden from the environment:

    ENTANGLE_ATOL        tolerance for amplitude comparisons (float)
    ENTANGLE_PRECISION   decimals shown by the formatters (int)
    ENTANGLE_SEED        seed for the measurement RNG (int)
    ENTANGLE_LOG_LEVEL   level used by the demo entry point
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    atol: float = 1e-9
    display_precision: int = 3
    seed: Optional[int] = None
    log_level: str = "WARNING"

    @property
    def display_tolerance(self) -> float:
        """Largest difference that survives rounding to display_precision."""
        return 0.5 * 10 ** -self.display_precision

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ENTANGLE_* environment variables."""

        def _get_int(name: str, default: Optional[int]) -> Optional[int]:
            value = os.environ.get(name)
            if value is None:
                return default
            try:
                return int(value)
            except ValueError:
                return default

        def _get_float(name: str, default: float) -> float:
            try:
                return float(os.environ.get(name, str(default)))
            except ValueError:
                return default

        return cls(
            atol=_get_float("ENTANGLE_ATOL", cls.atol),
            display_precision=_get_int("ENTANGLE_PRECISION", cls.display_precision),
            seed=_get_int("ENTANGLE_SEED", cls.seed),
            log_level=os.environ.get("ENTANGLE_LOG_LEVEL", cls.log_level).upper(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]):
    """Replace the process-wide settings (None re-reads the environment)."""
    global _settings
    _settings = settings
