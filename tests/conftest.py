"""Shared fixtures: settings that ignore the local .env and a fake YaYa client."""

import pytest

from app.config.setting import Settings
from app.shared.yaya_service import YaYaAPIError


def make_settings(**overrides) -> Settings:
    values = {
        "yaya_api_key": "test-key",
        "yaya_api_secret": "test-secret",
        "yaya_base_url": "https://yaya.test",
        "current_user_account_id": "acct-me",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_transactions(count: int, start: int = 1) -> list:
    return [
        {
            "id": f"tx-{n}",
            "sender": {"name": "Alice", "account": "acct-alice"},
            "receiver": {"name": "Me", "account": "acct-me"},
            "amount": n * 10,
            "currency": "ETB",
            "cause": f"payment {n}",
            "created_at_time": 1700000000 + n,
        }
        for n in range(start, start + count)
    ]


class FakeYaYaAPI:
    """Stands in for YaYaAPI; serves canned upstream pages and records calls."""

    def __init__(self, pages=None, search_results=None, error=None):
        self.pages = pages or {}
        self.search_results = search_results if search_results is not None else {"data": []}
        self.error = error
        self.page_calls = []
        self.search_calls = []

    def find_by_user(self, page: int = 1):
        self.page_calls.append(page)
        if self.error:
            raise self.error
        return self.pages.get(page, {"data": [], "lastPage": len(self.pages) or 1})

    def search(self, query: str):
        self.search_calls.append(query)
        if self.error:
            raise self.error
        return self.search_results


def upstream_pages(sizes, last_page=None, incoming=0, outgoing=0) -> dict:
    """Build a {page: payload} mapping with the given number of items per page."""
    pages = {}
    start = 1
    for number, size in enumerate(sizes, start=1):
        pages[number] = {
            "data": make_transactions(size, start=start),
            "total": sum(sizes),
            "lastPage": last_page if last_page is not None else len(sizes),
            "incomingSum": incoming,
            "outgoingSum": outgoing,
        }
        start += size
    return pages


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def upstream_error():
    return YaYaAPIError(
        "401 Client Error: Unauthorized",
        status_code=401,
        details={"error": "Invalid signature"},
    )
