"""
Analysis Settings

Tuning knobs for the analytics engine, loadable from the environment.

Environment variables:
    TRIAGE_DAMPING_FACTOR    PageRank damping factor       (default 0.85)
    TRIAGE_TOLERANCE         L1 convergence tolerance      (default 1e-6)
    TRIAGE_MAX_ITERATIONS    iteration cap for power loops (default 100)
    TRIAGE_INSIGHT_LIMIT     entries per insight list, <=0 means all (default 10)
    TRIAGE_ALLOW_SELF_LOOPS  keep self-referential edges   (default false)
"""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

T = TypeVar("T")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AnalysisSettings:
    """Engine settings. Invalid values raise ValueError on construction."""

    damping_factor: float = 0.85
    tolerance: float = 1e-6
    max_iterations: int = 100
    insight_limit: int = 10
    allow_self_loops: bool = False

    def __post_init__(self) -> None:
        if not 0.0 < self.damping_factor < 1.0:
            raise ValueError(f"damping_factor must be in (0, 1), got {self.damping_factor}")
        if not self.tolerance > 0.0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalysisSettings":
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            damping_factor=_read(env, "TRIAGE_DAMPING_FACTOR", float, defaults.damping_factor),
            tolerance=_read(env, "TRIAGE_TOLERANCE", float, defaults.tolerance),
            max_iterations=_read(env, "TRIAGE_MAX_ITERATIONS", int, defaults.max_iterations),
            insight_limit=_read(env, "TRIAGE_INSIGHT_LIMIT", int, defaults.insight_limit),
            allow_self_loops=_read(env, "TRIAGE_ALLOW_SELF_LOOPS", _parse_bool, defaults.allow_self_loops),
        )


def _read(env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


def _parse_bool(raw: str) -> bool:
    key = raw.lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")
