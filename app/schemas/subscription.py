from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from app.core.dates import MONTH_PATTERN

# price column is a PostgreSQL integer
MAX_PRICE = 2_147_483_647


class SubscriptionSchema(BaseModel):
    id: int
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: str = Field(examples=["01-2026"])
    end_date: Optional[str] = Field(default=None, examples=["05-2026"])


class SubscriptionCreate(BaseModel):
    service_name: str = Field(min_length=1, max_length=100, examples=["Netflix"])
    price: int = Field(ge=0, le=MAX_PRICE, examples=[599])
    user_id: uuid.UUID
    start_date: str = Field(pattern=MONTH_PATTERN, examples=["01-2026"])
    end_date: Optional[str] = Field(default=None, pattern=MONTH_PATTERN, examples=["05-2026"])


class SubscriptionUpdate(BaseModel):
    service_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[int] = Field(default=None, ge=0, le=MAX_PRICE)
    start_date: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)
    end_date: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)


class SubscriptionCreated(BaseModel):
    id: int


class SubscriptionResponse(BaseModel):
    subscription: SubscriptionSchema


class SubscriptionListResponse(BaseModel):
    subscriptions: list[SubscriptionSchema]


class PriceResponse(BaseModel):
    price: int


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    err: ErrorDetail
