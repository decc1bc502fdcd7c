"""
Toast notifications.

The cart store reports successful adds and checkouts through a Notifier.
ToastCenter is the default surface: it keeps each toast until its
duration elapses or it is dismissed, which is all a page needs to render
them. Nothing in the cart depends on a toast being shown.
"""
import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from storefront.config import TOAST_DURATION_SECONDS


class ToastType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Toast:
    id: str
    message: str
    type: ToastType
    duration: float
    created_at: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.duration

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "message": self.message,
            "type": self.type.value,
            "duration_ms": int(self.duration * 1000),
        }


class Notifier:
    """Fire-and-forget notification surface."""

    def show(
        self,
        message: str,
        type: ToastType = ToastType.SUCCESS,
        duration: Optional[float] = None,
    ) -> Toast:
        raise NotImplementedError


class ToastCenter(Notifier):
    """In-process toast queue with expiry."""

    def __init__(
        self,
        default_duration: float = TOAST_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_duration = default_duration
        self._clock = clock
        self._toasts: List[Toast] = []
        self._ids = itertools.count(1)

    def show(
        self,
        message: str,
        type: ToastType = ToastType.SUCCESS,
        duration: Optional[float] = None,
    ) -> Toast:
        toast = Toast(
            id=str(next(self._ids)),
            message=message,
            type=type,
            duration=self.default_duration if duration is None else duration,
            created_at=self._clock(),
        )
        self._toasts.append(toast)
        return toast

    def dismiss(self, toast_id: str) -> None:
        self._toasts = [t for t in self._toasts if t.id != toast_id]

    def active(self) -> List[Toast]:
        """Toasts still on screen; expired ones are dropped."""
        now = self._clock()
        self._toasts = [t for t in self._toasts if t.expires_at > now]
        return list(self._toasts)
