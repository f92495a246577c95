from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
import logging
from app.domains.transactions.models import SearchRequest, SearchResponse, TransactionListResponse
from app.domains.transactions.services import TransactionService
from app.shared.yaya_service import YaYaAPIError

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependency to get the transaction service from app.state
def get_transaction_service(request: Request) -> TransactionService:
    return request.app.state.transaction_service


def upstream_error_response(error: str, e: YaYaAPIError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "details": e.details})


# Plain def handlers: the upstream client blocks, so these run in the threadpool
@router.get("/transactions", response_model=TransactionListResponse)
def get_transactions(
    p: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return service.list_transactions(page=p, limit=limit)
    except YaYaAPIError as e:
        logger.error(f"Failed to fetch transactions: {e.details}")
        return upstream_error_response("Failed to fetch transactions", e)


@router.post("/transactions/search", response_model=SearchResponse)
def search_transactions(
    request_data: SearchRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return service.search_transactions(request_data.query, page=request_data.p, limit=request_data.limit)
    except YaYaAPIError as e:
        logger.error(f"Failed to search transactions: {e.details}")
        return upstream_error_response("Failed to search transactions", e)
