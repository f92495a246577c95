# app/domains/transactions/models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class Transaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = "-"
    sender: str = "-"
    sender_account: Optional[str] = Field(default=None, alias="senderAccount")
    receiver: str = "-"
    receiver_account: Optional[str] = Field(default=None, alias="receiverAccount")
    amount: float = 0
    currency: str = "ETB"
    cause: str = "-"
    created_at: Optional[Union[int, float, str]] = Field(default=None, alias="createdAt")


class AggregateResult(BaseModel):
    transactions: List[Transaction] = []
    upstream_total: int = 0
    incoming_sum: float = 0
    outgoing_sum: float = 0
    pages_fetched: int = 0


class SearchRequest(BaseModel):
    query: Optional[str] = ""
    p: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[Transaction]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")
    current_user_account_id: Optional[str] = Field(default=None, alias="currentUserAccountId")


class TransactionListResponse(SearchResponse):
    last_page: bool = Field(alias="lastPage")
    per_page: int = Field(alias="perPage")
    incoming_sum: float = Field(default=0, alias="incomingSum")
    outgoing_sum: float = Field(default=0, alias="outgoingSum")
