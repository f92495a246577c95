import logging
from typing import Optional

from app.config.setting import Settings, SumsSource
from app.domains.transactions.models import (
    AggregateResult,
    SearchResponse,
    TransactionListResponse,
)
from app.domains.transactions.normalizer import to_number, normalize_transactions
from app.domains.transactions.pagination import paginate, total_pages
from app.shared.yaya_service import YaYaAPI

logger = logging.getLogger(__name__)


def _items(payload) -> list:
    # search has been seen to return a bare list instead of {"data": [...]}
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return payload.get("data") or []
    return []


def _last_page(value) -> int:
    try:
        return int(value or 1)
    except (TypeError, ValueError):
        return 1


class TransactionService:
    def __init__(self, client: YaYaAPI, settings: Settings):
        self.client = client
        self.max_pages = settings.max_upstream_pages
        self.sums_source = settings.sums_source
        self.current_user_account_id = settings.current_user_account_id

    def fetch_all_transactions(self) -> AggregateResult:
        """
        Walk the upstream find-by-user pages and concatenate them.

        Stops once lastPage is reached, a page comes back empty, or
        max_pages requests have been made, whichever happens first.
        """
        raw_transactions = []
        page_sums = []
        upstream_total = 0
        current_page = 1
        has_more_pages = True

        while has_more_pages and current_page <= self.max_pages:
            data = self.client.find_by_user(page=current_page)
            page_transactions = _items(data)
            if not isinstance(data, dict):
                data = {}

            raw_transactions.extend(page_transactions)
            upstream_total = int(to_number(data.get("total")))
            page_sums.append((to_number(data.get("incomingSum")), to_number(data.get("outgoingSum"))))

            last_page = _last_page(data.get("lastPage"))
            logger.info(
                f"Fetched upstream page {current_page}/{last_page} with {len(page_transactions)} transactions"
            )

            has_more_pages = current_page < last_page and len(page_transactions) > 0
            current_page += 1

        if has_more_pages:
            logger.warning(f"Stopped after {self.max_pages} upstream pages; results may be incomplete")

        incoming_sum, outgoing_sum = self._resolve_sums(page_sums)
        transactions = normalize_transactions(raw_transactions)

        if upstream_total and upstream_total != len(transactions):
            logger.info(f"Upstream reports {upstream_total} transactions, aggregated {len(transactions)}")

        return AggregateResult(
            transactions=transactions,
            upstream_total=upstream_total,
            incoming_sum=incoming_sum,
            outgoing_sum=outgoing_sum,
            pages_fetched=len(page_sums),
        )

    def _resolve_sums(self, page_sums):
        if not page_sums:
            return 0, 0

        if self.sums_source == SumsSource.SUM:
            return sum(s[0] for s in page_sums), sum(s[1] for s in page_sums)

        if len(set(page_sums)) > 1:
            logger.warning(f"Upstream pages disagree on incoming/outgoing sums: {page_sums}")

        if self.sums_source == SumsSource.LAST:
            return page_sums[-1]
        return page_sums[0]

    def list_transactions(self, page: int = 1, limit: int = 10) -> TransactionListResponse:
        aggregate = self.fetch_all_transactions()

        # Metadata comes from what was actually aggregated, not the upstream total
        total = len(aggregate.transactions)
        pages = total_pages(total, limit)

        return TransactionListResponse(
            data=paginate(aggregate.transactions, page, limit),
            total=total,
            page=page,
            limit=limit,
            total_pages=pages,
            last_page=page >= pages,
            per_page=limit,
            incoming_sum=aggregate.incoming_sum,
            outgoing_sum=aggregate.outgoing_sum,
            current_user_account_id=self.current_user_account_id,
        )

    def search_transactions(self, query: Optional[str], page: int = 1, limit: int = 10) -> SearchResponse:
        response = self.client.search(query or "")
        transactions = normalize_transactions(_items(response))

        logger.info(f"Search query: {query!r}, {len(transactions)} results from YaYa API")
        logger.info(f"Requested page: {page}, limit: {limit}")

        results = paginate(transactions, page, limit)
        logger.info(f"Returning {len(results)} results for page {page}")

        return SearchResponse(
            data=results,
            total=len(transactions),
            page=page,
            limit=limit,
            total_pages=total_pages(len(transactions), limit),
            current_user_account_id=self.current_user_account_id,
        )
