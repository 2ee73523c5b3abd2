"""
Simulation clock: converts wall-clock frame deltas into simulated years.

Two scaling policies are supported:

``auto``
    The primary star's whole lifetime plays back over a fixed number of
    wall-clock seconds (60 by default). The rate is recomputed every frame
    from the *current* ``t_total``, so a lifetime changed by mass transfer
    is silently re-targeted for the remaining playback.
``manual``
    ``dt_years = dt_s * speed * 1e7`` for a user chosen speed multiplier.

The clock also tracks the previous animation timestamp so that drivers
can feed it raw frame timestamps; the first frame after a reset yields a
zero delta.
"""

from __future__ import annotations

from typing import Optional

from .config import EngineConfig

AUTO = "auto"
MANUAL = "manual"
MODES = (AUTO, MANUAL)


class SimulationClock:
    """Frame-delta to simulated-year conversion."""

    def __init__(self, config: EngineConfig):
        self.cfg = config
        self.last_timestamp_ms: Optional[float] = None

    def years_for(self, dt_ms: float, mode: str, t_total: float,
                  speed_multiplier: Optional[float] = None) -> float:
        """Return the simulated years for a ``dt_ms`` frame under ``mode``.

        Raises:
            ValueError: if ``mode`` is not ``"auto"`` or ``"manual"``.
        """
        dt_s = max(0.0, dt_ms) / 1000.0
        if mode == AUTO:
            return dt_s * (t_total / self.cfg.auto_scale_seconds)
        if mode == MANUAL:
            speed = self.cfg.default_speed if speed_multiplier is None else speed_multiplier
            return dt_s * speed * self.cfg.manual_years_per_second
        raise ValueError(f"unknown clock mode {mode!r}; expected one of {MODES}")

    def frame_delta(self, timestamp_ms: float) -> float:
        """Return milliseconds elapsed since the previous frame timestamp."""
        if self.last_timestamp_ms is None:
            self.last_timestamp_ms = timestamp_ms
        dt_ms = timestamp_ms - self.last_timestamp_ms
        self.last_timestamp_ms = timestamp_ms
        return max(0.0, dt_ms)

    def reset(self) -> None:
        self.last_timestamp_ms = None
