from typing import Dict

ALLOW_ORIGIN = "*"
ALLOW_METHODS = ("GET", "POST", "OPTIONS")
ALLOW_HEADERS = ("Content-Type", "Authorization")


def get_cors_headers() -> Dict[str, str]:
    """Headers sent on every response, preflight included."""
    return {
        "Access-Control-Allow-Origin": ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": ", ".join(ALLOW_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOW_HEADERS),
    }
