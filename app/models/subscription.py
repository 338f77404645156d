"""Plain row types exchanged with the subscription repository."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class SubscriptionRow:
    id: int
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: Optional[date] = None


@dataclass
class NewSubscription:
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: Optional[date] = None


@dataclass
class SubscriptionPatch:
    """Partial update; ``None`` keeps the stored value."""

    service_name: Optional[str] = None
    price: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
