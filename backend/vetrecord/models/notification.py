"""
Transient user notifications (toasts).
"""

from pydantic import BaseModel
from typing import Generic, TypeVar
from enum import Enum


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Message shown once to the user after an action."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls(title="Sucesso!", description=description)

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls(title="Erro", description=description, variant=NotificationVariant.DESTRUCTIVE)


T = TypeVar("T")


class Mutation(BaseModel, Generic[T]):
    """Result of a write, with the notification to show for it."""
    data: T
    notification: Notification
