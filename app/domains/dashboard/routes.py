from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
import logging
from typing import Optional
from app.config.setting import Settings
from app.domains.dashboard.views import DashboardPage, render_dashboard
from app.domains.transactions.routes import get_transaction_service
from app.domains.transactions.services import TransactionService
from app.shared.yaya_service import YaYaAPIError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_message(label: str, e: YaYaAPIError) -> str:
    details = e.details
    if isinstance(details, dict):
        details = details.get("message") or details.get("error") or details
    return f"{label}: {details}"


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    p: int = Query(1, ge=1),
    q: Optional[str] = None,
    service: TransactionService = Depends(get_transaction_service),
    settings: Settings = Depends(get_app_settings),
):
    query = (q or "").strip()
    limit = settings.page_size
    view = DashboardPage(
        page=p,
        limit=limit,
        query=query,
        current_account_id=settings.current_user_account_id,
        locale=settings.display_locale,
        title=settings.app_name,
    )

    try:
        if query:
            result = service.search_transactions(query, page=p, limit=limit)
        else:
            result = service.list_transactions(page=p, limit=limit)
        view.transactions = result.data
        view.total = result.total
        view.total_pages = result.total_pages or 1
    except YaYaAPIError as e:
        label = "Failed to search transactions" if query else "Failed to load transactions"
        logger.error(f"{label}: {e.details}")
        view.error = error_message(label, e)

    return HTMLResponse(content=render_dashboard(view), status_code=200)
