#!/usr/bin/env python3
"""
Connectivity check for the YaYa Wallet API.

Reports whether credentials are configured, then makes one signed
find-by-user call and one signed search call and prints the shape of
each response. Run from the repository root:

    python -m scripts.check_api
"""

import sys

from dotenv import load_dotenv

from app.config.setting import Settings, get_settings
from app.shared.yaya_service import YaYaAPI, YaYaAPIError

SEPARATOR = "=" * 50


def describe(data) -> str:
    if isinstance(data, list):
        return f"list of {len(data)} transactions"
    if isinstance(data, dict):
        items = data.get("data")
        keys = ", ".join(sorted(data.keys()))
        if isinstance(items, list):
            return f"object with keys [{keys}], {len(items)} transactions"
        return f"object with keys [{keys}]"
    return type(data).__name__


def check_api(settings: Settings, client: YaYaAPI, out=print) -> bool:
    out("Configuration:")
    out(f"API Key: {'Configured' if settings.yaya_api_key else 'Missing'}")
    out(f"API Secret: {'Configured' if settings.yaya_api_secret else 'Missing'}")
    out(f"Base URL: {settings.yaya_base_url}")

    if not settings.has_credentials:
        out("Missing API credentials. Set YAYA_API_KEY and YAYA_API_SECRET.")
        return False

    checks = [
        ("Fetching transactions", lambda: client.find_by_user(page=1)),
        ("Searching transactions", lambda: client.search("test")),
    ]

    ok = True
    for label, call in checks:
        out(SEPARATOR)
        out(f"{label}...")
        try:
            out(f"OK: {describe(call())}")
        except YaYaAPIError as e:
            ok = False
            out(f"FAILED ({e.status_code or 'no response'}): {e.details}")

    out(SEPARATOR)
    return ok


def main() -> int:
    load_dotenv()
    settings = get_settings()
    return 0 if check_api(settings, YaYaAPI(settings)) else 1


if __name__ == "__main__":
    sys.exit(main())
