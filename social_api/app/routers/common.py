from __future__ import annotations

from typing import Dict

GENERIC_ERROR_MESSAGE = "An error occurred"
USAGE_EXAMPLE = "/api/tweet?url=https://x.com/username/status/1234567890"


def cache_control(max_age: int) -> Dict[str, str]:
    return {"Cache-Control": f"public, max-age={max_age}"}
