"""
Mapping from raw YaYa transaction payloads to the internal Transaction model.

Upstream records are loosely typed and the same value shows up under
different keys depending on the endpoint, so every field has an ordered
list of candidate keys. The first truthy value wins.
"""

import math
from typing import Any, Optional

from app.domains.transactions.models import Transaction

ID_KEYS = ("id", "transactionId", "transaction_id")
CAUSE_KEYS = ("cause", "note", "description")
CREATED_AT_KEYS = ("created_at_time", "createdAt", "created_at", "date", "timestamp")
PARTY_ACCOUNT_KEYS = ("account", "id")


def _first(raw: dict, keys) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    # NaN and infinities cannot be serialized to JSON
    if not math.isfinite(number):
        return 0
    return number


def _party(raw: dict, role: str):
    """Return (display name, account identifier) for 'sender' or 'receiver'."""
    value = raw.get(role)
    name: Optional[Any] = None
    account: Optional[Any] = None

    if isinstance(value, dict):
        name = value.get("name")
        account = _first(value, PARTY_ACCOUNT_KEYS)

    name = name or raw.get(f"{role}_name")
    if not name and value and not isinstance(value, dict):
        name = value
    account = account or raw.get(f"{role}_account")

    return (str(name) if name else "-"), (str(account) if account else None)


def normalize_transaction(raw: dict) -> Transaction:
    sender, sender_account = _party(raw, "sender")
    receiver, receiver_account = _party(raw, "receiver")

    created_at = _first(raw, CREATED_AT_KEYS)
    if isinstance(created_at, bool):
        created_at = None
    elif created_at is not None and not isinstance(created_at, (int, float, str)):
        created_at = str(created_at)

    return Transaction(
        id=str(_first(raw, ID_KEYS) or "-"),
        sender=sender,
        sender_account=sender_account,
        receiver=receiver,
        receiver_account=receiver_account,
        amount=to_number(raw.get("amount")),
        currency=str(raw.get("currency") or "ETB"),
        cause=str(_first(raw, CAUSE_KEYS) or "-"),
        created_at=created_at,
    )


def normalize_transactions(items) -> list[Transaction]:
    return [normalize_transaction(item if isinstance(item, dict) else {}) for item in items or []]
