"""Environment-variable-based configuration for the trackers."""

from __future__ import annotations

import os

REST_SECONDS: int = int(os.environ.get("WELLNESS_REST_SECONDS", "180"))
REST_EXTEND_SECONDS: int = int(os.environ.get("WELLNESS_REST_EXTEND_SECONDS", "30"))
DEFAULT_FAST_HOURS: float = float(os.environ.get("WELLNESS_DEFAULT_FAST_HOURS", "16"))
RECENT_FAST_DAYS: int = int(os.environ.get("WELLNESS_RECENT_FAST_DAYS", "30"))
TIMEZONE: str = os.environ.get("WELLNESS_TIMEZONE", "")  # Empty = naive local time
