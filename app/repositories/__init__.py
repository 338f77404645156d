"""
Persistence layer.
"""
from app.repositories.errors import ConstraintViolationError, RecordNotFoundError, StorageError
from app.repositories.subscriptions import SubscriptionRepository

__all__ = [
    "ConstraintViolationError",
    "RecordNotFoundError",
    "StorageError",
    "SubscriptionRepository",
]
