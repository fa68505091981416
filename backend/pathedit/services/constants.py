"""
Tunable constants for the edge geometry kernel.

Values are read once at import time.  Each has an environment variable
override so deployments can adjust hit sensitivity or sampling density
without code changes:

- ``PATHEDIT_HIT_DISTANCE`` – default hit tolerance in canvas units.
- ``PATHEDIT_CUBIC_SAMPLES`` – number of uniform intervals used by the
  coarse scan of the cubic closest‑point search.
- ``PATHEDIT_LENGTH_SUBDIVISIONS`` – number of chords used to
  approximate cubic arc length.

``EDGE_DEBUG`` is deliberately not read here; it is checked at call
time so it can be toggled in a running process.
"""

from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


# Default hit distance in pixels.
DEFAULT_HIT_DISTANCE: float = _env_float("PATHEDIT_HIT_DISTANCE", 6.0)

# Coarse scan resolution for cubic point projection.
CUBIC_CLOSEST_POINT_SAMPLES: int = max(16, _env_int("PATHEDIT_CUBIC_SAMPLES", 32))

# Refinement stops when the bracket around t is narrower than this.
CUBIC_TIME_TOLERANCE: float = 1e-7

# Hard cap on refinement steps.
CUBIC_MAX_ITERATIONS: int = 64

# Chord count for cubic length; never below 32.
CUBIC_LENGTH_SUBDIVISIONS: int = max(32, _env_int("PATHEDIT_LENGTH_SUBDIVISIONS", 64))


def edge_debug_enabled() -> bool:
    """Return True when verbose hit‑test tracing is requested."""
    return bool(os.getenv("EDGE_DEBUG"))
