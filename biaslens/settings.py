"""Runtime settings for biaslens.

Every value can be overridden from the environment so the host shell does
not need to pass configuration through each call.
"""

from __future__ import annotations

import os


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Bias service
# ---------------------------------------------------------------------------
BIAS_SERVICE_URL = os.getenv(
    "BIASLENS_SERVICE_URL",
    "https://unbiased-heka.onrender.com/api/analyze-bias",
)

# No timeout unless the host asks for one (seconds).
REQUEST_TIMEOUT: float | None = _env_float("BIASLENS_TIMEOUT")

USER_AGENT = "biaslens/0.1"

# ---------------------------------------------------------------------------
# Source profiles (YAML, optional)
# ---------------------------------------------------------------------------
PROFILES_PATH = os.getenv("BIASLENS_PROFILES") or None

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("BIASLENS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
