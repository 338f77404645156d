"""
Subscription lifecycle and spend aggregation.

Translates between wire-level ``MM-YYYY`` months and stored dates, and maps
repository failures onto the three error kinds the API exposes: not found,
incorrect time range and internal.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.core.dates import MonthFormatError, format_month, months_spanned, parse_month
from app.core.exceptions import IncorrectTimeRangeError, InternalError, NotFoundError
from app.models import NewSubscription, SubscriptionPatch, SubscriptionRow
from app.repositories import (
    ConstraintViolationError,
    RecordNotFoundError,
    StorageError,
    SubscriptionRepository,
)
from app.schemas.subscription import SubscriptionSchema

logger = logging.getLogger(__name__)


def _to_schema(row: SubscriptionRow) -> SubscriptionSchema:
    return SubscriptionSchema(
        id=row.id,
        service_name=row.service_name,
        price=row.price,
        user_id=row.user_id,
        start_date=format_month(row.start_date),
        end_date=format_month(row.end_date) if row.end_date else None,
    )


def _month(value: str) -> date:
    # Format is validated at the API boundary; a failure here is a bug upstream.
    try:
        return parse_month(value)
    except MonthFormatError as exc:
        logger.error(f"Unvalidated month reached the service: {exc}")
        raise InternalError() from exc


def _optional_month(value: Optional[str]) -> Optional[date]:
    return _month(value) if value is not None else None


class SubscriptionService:
    """Repository calls are blocking and run in the worker threadpool."""

    def __init__(self, repository: SubscriptionRepository):
        self.repository = repository

    async def create(
        self,
        service_name: str,
        price: int,
        user_id: uuid.UUID,
        start_date: str,
        end_date: Optional[str] = None,
    ) -> int:
        start = _month(start_date)
        end = _optional_month(end_date)
        if end is not None and end < start:
            raise IncorrectTimeRangeError()

        try:
            subscription_id = await run_in_threadpool(
                self.repository.create,
                NewSubscription(
                    service_name=service_name,
                    price=price,
                    user_id=user_id,
                    start_date=start,
                    end_date=end,
                ),
            )
        except ConstraintViolationError as exc:
            raise IncorrectTimeRangeError() from exc
        except StorageError as exc:
            logger.error(f"SubscriptionService.create - internal error: {exc}")
            raise InternalError() from exc

        logger.info(f"The subscription id={subscription_id} has been created")
        return subscription_id

    async def get_by_id(self, subscription_id: int) -> SubscriptionSchema:
        try:
            row = await run_in_threadpool(self.repository.get_by_id, subscription_id)
        except RecordNotFoundError as exc:
            raise NotFoundError() from exc
        except StorageError as exc:
            logger.error(f"SubscriptionService.get_by_id - internal error: {exc}")
            raise InternalError() from exc

        logger.info(f"Subscription id={subscription_id} received successfully")
        return _to_schema(row)

    async def get_by_user(self, user_id: uuid.UUID) -> list[SubscriptionSchema]:
        try:
            rows = await run_in_threadpool(self.repository.get_by_user, user_id)
        except StorageError as exc:
            logger.error(f"SubscriptionService.get_by_user - internal error: {exc}")
            raise InternalError() from exc

        logger.info(f"Received {len(rows)} subscriptions for user {user_id}")
        return [_to_schema(row) for row in rows]

    async def delete_by_id(self, subscription_id: int) -> SubscriptionSchema:
        """Delete a subscription and return it as it was just before removal."""
        try:
            row = await run_in_threadpool(self.repository.delete_by_id, subscription_id)
        except RecordNotFoundError as exc:
            raise NotFoundError() from exc
        except StorageError as exc:
            logger.error(f"SubscriptionService.delete_by_id - internal error: {exc}")
            raise InternalError() from exc

        logger.info(f"Subscription id={subscription_id} deleted successfully")
        return _to_schema(row)

    async def update(
        self,
        subscription_id: int,
        service_name: Optional[str] = None,
        price: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> SubscriptionSchema:
        """Apply a partial update; omitted fields keep their stored values.

        When only one of the dates is supplied the ordering against the stored
        value is enforced by the table check constraint.
        """
        patch = SubscriptionPatch(
            service_name=service_name,
            price=price,
            start_date=_optional_month(start_date),
            end_date=_optional_month(end_date),
        )
        if patch.start_date and patch.end_date and patch.end_date < patch.start_date:
            raise IncorrectTimeRangeError()

        try:
            row = await run_in_threadpool(self.repository.update, subscription_id, patch)
        except RecordNotFoundError as exc:
            raise NotFoundError() from exc
        except ConstraintViolationError as exc:
            raise IncorrectTimeRangeError() from exc
        except StorageError as exc:
            logger.error(f"SubscriptionService.update - internal error: {exc}")
            raise InternalError() from exc

        logger.info(f"Subscription id={subscription_id} updated successfully")
        return _to_schema(row)

    async def get_price_by_filter(
        self,
        start_date: str,
        end_date: str,
        user_id: Optional[uuid.UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        """Total spend of matching subscriptions over an inclusive month window.

        Every subscription active at any point in the window is billed its
        full monthly price for each month of the window. This is the intended
        business rule, not a missing proration.
        """
        start = _month(start_date)
        end = _month(end_date)
        if end < start:
            raise IncorrectTimeRangeError()

        try:
            monthly = await run_in_threadpool(
                self.repository.get_price_by_filter,
                start,
                end,
                user_id=user_id,
                service_name=service_name,
            )
        except StorageError as exc:
            logger.error(f"SubscriptionService.get_price_by_filter - internal error: {exc}")
            raise InternalError() from exc

        total = monthly * months_spanned(start, end)
        logger.info(f"Total cost for the period from {start_date} to {end_date} is {total}")
        return total
