from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.dependencies import get_subscription_service
from app.core.dates import MONTH_PATTERN
from app.schemas.subscription import (
    ErrorResponse,
    PriceResponse,
    SubscriptionCreate,
    SubscriptionCreated,
    SubscriptionListResponse,
    SubscriptionResponse,
    SubscriptionUpdate,
)
from app.services.subscription_service import SubscriptionService

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SubscriptionCreated)
async def create_subscription(
    payload: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionCreated:
    """Create a subscription for a user."""
    subscription_id = await service.create(
        service_name=payload.service_name,
        price=payload.price,
        user_id=payload.user_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return SubscriptionCreated(id=subscription_id)


@router.get("/price", response_model=PriceResponse)
async def get_price_by_filter(
    start_date: str = Query(pattern=MONTH_PATTERN, examples=["01-2026"]),
    end_date: str = Query(pattern=MONTH_PATTERN, examples=["05-2026"]),
    user_id: Optional[uuid.UUID] = None,
    service_name: Optional[str] = Query(default=None, max_length=100),
    service: SubscriptionService = Depends(get_subscription_service),
) -> PriceResponse:
    """
    Total cost of matching subscriptions over an inclusive month window.
    """
    price = await service.get_price_by_filter(
        start_date,
        end_date,
        user_id=user_id,
        service_name=service_name,
    )
    return PriceResponse(price=price)


@router.get("/user/{user_id}", response_model=SubscriptionListResponse)
async def get_user_subscriptions(
    user_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionListResponse:
    subscriptions = await service.get_by_user(user_id)
    return SubscriptionListResponse(subscriptions=subscriptions)


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_subscription(
    subscription_id: int = Path(ge=0, description="Subscription ID"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    subscription = await service.get_by_id(subscription_id)
    return SubscriptionResponse(subscription=subscription)


@router.delete(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_subscription(
    subscription_id: int = Path(ge=0, description="Subscription ID"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    """Delete a subscription and return its final state."""
    subscription = await service.delete_by_id(subscription_id)
    return SubscriptionResponse(subscription=subscription)


@router.patch(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_subscription(
    payload: SubscriptionUpdate,
    subscription_id: int = Path(ge=0, description="Subscription ID"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    subscription = await service.update(
        subscription_id,
        service_name=payload.service_name,
        price=payload.price,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return SubscriptionResponse(subscription=subscription)
