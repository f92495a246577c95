import logging
import re
from datetime import datetime, timezone
from typing import Optional

from babel.core import UnknownLocaleError
from babel.dates import format_datetime
from babel.numbers import UnknownCurrencyError, format_currency, validate_currency
from dateutil import parser as date_parser

from app.domains.transactions.models import Transaction
from app.domains.transactions.normalizer import to_number

logger = logging.getLogger(__name__)

INCOMING = "Incoming"
OUTGOING = "Outgoing"
INVALID_DATE = "Invalid Date"
DEFAULT_CURRENCY = "ETB"
DATE_PATTERN = "MMM d, y, hh:mm a"

# Two defaults that differ in year, month and day; a string that parses to
# different datetimes under each is missing part of its date.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

_UNIX_SECONDS = re.compile(r"^-?\d+(\.\d+)?$")


def is_top_up(tx: Transaction) -> bool:
    """A transfer to oneself, which the wallet shows for top-ups."""
    if tx.sender == "-":
        return False
    if tx.sender_account and tx.receiver_account:
        return tx.sender_account == tx.receiver_account
    return tx.sender == tx.receiver


def classify_direction(tx: Transaction, current_account_id: Optional[str]) -> str:
    if is_top_up(tx):
        return INCOMING
    if current_account_id is None or str(current_account_id) == "":
        return OUTGOING

    account_id = str(current_account_id)
    receiver_ids = {tx.receiver_account, tx.receiver if tx.receiver != "-" else None}
    return INCOMING if account_id in receiver_ids else OUTGOING


def format_amount(amount, currency: Optional[str] = None, locale: str = "en_US") -> str:
    number = to_number(amount)
    code = currency or DEFAULT_CURRENCY
    try:
        validate_currency(code.upper())
        # currency_digits=False keeps the locale pattern's two decimals for every currency
        return format_currency(number, code.upper(), locale=locale, currency_digits=False)
    except (UnknownCurrencyError, UnknownLocaleError, ValueError) as e:
        logger.debug(f"Falling back to plain amount for {code} in {locale}: {e}")
        return f"{code} {number:.2f}"


def _to_datetime(value) -> Optional[datetime]:
    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _UNIX_SECONDS.match(value):
            value = float(value)
        else:
            first, second = (date_parser.parse(value, default=default) for default in _PARSE_DEFAULTS)
            # dateutil fills missing parts from the default instead of failing
            return first if first == second else None

    if isinstance(value, (int, float)):
        # Upstream timestamps are Unix seconds
        return datetime.fromtimestamp(value, tz=timezone.utc)

    return None


def format_date(value, locale: str = "en_US") -> str:
    try:
        date = _to_datetime(value)
    except (ValueError, OverflowError, OSError):
        return INVALID_DATE
    if date is None:
        return INVALID_DATE

    try:
        return format_datetime(date, DATE_PATTERN, locale=locale)
    except (UnknownLocaleError, ValueError):
        return format_datetime(date, DATE_PATTERN, locale="en_US")


def page_window(page: int, total_pages: int, max_visible: int = 5) -> list[int]:
    """Page numbers to offer in the navigation bar."""
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    start = max(1, page - 2)
    end = min(total_pages, start + max_visible - 1)
    return list(range(start, end + 1))


def showing_range(page: int, limit: int, total: int) -> tuple[int, int]:
    """First and last item numbers for 'Showing X to Y of Z'."""
    start = (page - 1) * limit + 1
    end = min(page * limit, total)
    return start, end
