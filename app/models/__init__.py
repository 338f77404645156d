"""
SQLAlchemy models for the subscription tracker.
"""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Date, Integer, String, Uuid
from sqlalchemy.orm import declarative_base

from app.models.subscription import NewSubscription, SubscriptionPatch, SubscriptionRow

Base = declarative_base()

DATE_RANGE_CONSTRAINT = "subscription_date_range_check"


class Subscription(Base):
    __tablename__ = "subscription"
    __table_args__ = (
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name=DATE_RANGE_CONSTRAINT,
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_name = Column(String(100), nullable=False)
    price = Column(Integer, nullable=False)
    user_id = Column(Uuid, nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)


__all__ = [
    "Base",
    "DATE_RANGE_CONSTRAINT",
    "NewSubscription",
    "Subscription",
    "SubscriptionPatch",
    "SubscriptionRow",
]
