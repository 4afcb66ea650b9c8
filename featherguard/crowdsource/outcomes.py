"""
Outcome types for external calls
Turn an awaited call into a value instead of an exception.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class Outcome(Generic[T]):
    """Result of one external call: a value or the error that replaced it."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def attempt(call: Callable[[], Awaitable[T]], label: str = "call") -> Outcome[T]:
    """
    Start a collaborator call, await it and capture any failure.

    Failures raised while the call is being created (a synchronous
    exception, a missing method, a None collaborator) are captured the
    same way as failures raised while it is awaited.

    Args:
        call: Zero-argument callable returning the awaitable to run
        label: Name used in log messages

    Returns:
        Outcome holding either the value or the exception
    """
    try:
        return Outcome(value=await call())
    except Exception as e:
        logger.warning(f"{label} failed: {type(e).__name__}: {e}")
        return Outcome(error=e)


class NoticeLevel(str, Enum):
    """How prominently the presentation layer should show a notice."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notice:
    """Message for the user about the last step."""
    level: NoticeLevel
    message: str

    @property
    def is_blocking(self) -> bool:
        return self.level == NoticeLevel.ERROR

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message}
