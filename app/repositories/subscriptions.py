"""
Subscription persistence.
Single-row reads and writes plus the spend aggregate over the `subscription` table.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

from sqlalchemy import Date, Integer, String, delete, func, insert, literal, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import NewSubscription, Subscription, SubscriptionPatch, SubscriptionRow
from app.repositories.errors import RecordNotFoundError, translate_error

_COLUMNS = (
    Subscription.id,
    Subscription.service_name,
    Subscription.price,
    Subscription.user_id,
    Subscription.start_date,
    Subscription.end_date,
)


def _to_row(record) -> SubscriptionRow:
    return SubscriptionRow(
        id=record.id,
        service_name=record.service_name,
        price=record.price,
        user_id=record.user_id,
        start_date=record.start_date,
        end_date=record.end_date,
    )


class SubscriptionRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, subscription: NewSubscription) -> int:
        stmt = (
            insert(Subscription)
            .values(
                service_name=subscription.service_name,
                price=subscription.price,
                user_id=subscription.user_id,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
            )
            .returning(Subscription.id)
        )
        try:
            new_id = self.db.execute(stmt).scalar_one()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_error(exc, "SubscriptionRepository.create") from exc
        return int(new_id)

    def get_by_id(self, subscription_id: int) -> SubscriptionRow:
        stmt = select(*_COLUMNS).where(Subscription.id == subscription_id)
        try:
            record = self.db.execute(stmt).one_or_none()
        except SQLAlchemyError as exc:
            raise translate_error(exc, "SubscriptionRepository.get_by_id") from exc
        if record is None:
            raise RecordNotFoundError(f"subscription id={subscription_id}")
        return _to_row(record)

    def get_by_user(self, user_id: uuid.UUID) -> list[SubscriptionRow]:
        stmt = select(*_COLUMNS).where(Subscription.user_id == user_id).order_by(Subscription.id)
        try:
            records = self.db.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise translate_error(exc, "SubscriptionRepository.get_by_user") from exc
        return [_to_row(r) for r in records]

    def delete_by_id(self, subscription_id: int) -> SubscriptionRow:
        stmt = (
            delete(Subscription)
            .where(Subscription.id == subscription_id)
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        try:
            record = self.db.execute(stmt).one_or_none()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_error(exc, "SubscriptionRepository.delete_by_id") from exc
        if record is None:
            raise RecordNotFoundError(f"subscription id={subscription_id}")
        return _to_row(record)

    def update(self, subscription_id: int, patch: SubscriptionPatch) -> SubscriptionRow:
        """Coalescing update: fields left as None keep their stored value."""
        stmt = (
            update(Subscription)
            .where(Subscription.id == subscription_id)
            .values(
                service_name=func.coalesce(literal(patch.service_name, String), Subscription.service_name),
                price=func.coalesce(literal(patch.price, Integer), Subscription.price),
                start_date=func.coalesce(literal(patch.start_date, Date), Subscription.start_date),
                end_date=func.coalesce(literal(patch.end_date, Date), Subscription.end_date),
            )
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        try:
            record = self.db.execute(stmt).one_or_none()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_error(exc, "SubscriptionRepository.update") from exc
        if record is None:
            raise RecordNotFoundError(f"subscription id={subscription_id}")
        return _to_row(record)

    def get_price_by_filter(
        self,
        start_date: date,
        end_date: date,
        user_id: Optional[uuid.UUID] = None,
        service_name: Optional[str] = None,
    ) -> int:
        """Sum of monthly prices for subscriptions active at any point in [start_date, end_date]."""
        stmt = select(func.coalesce(func.sum(Subscription.price), 0)).where(
            Subscription.start_date <= end_date,
            or_(Subscription.end_date.is_(None), Subscription.end_date >= start_date),
        )
        if user_id is not None:
            stmt = stmt.where(Subscription.user_id == user_id)
        if service_name is not None:
            stmt = stmt.where(Subscription.service_name == service_name)
        try:
            total = self.db.execute(stmt).scalar_one()
        except SQLAlchemyError as exc:
            raise translate_error(exc, "SubscriptionRepository.get_price_by_filter") from exc
        return int(total or 0)
