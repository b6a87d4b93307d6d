"""Retry policy with exponential backoff for transient Gemini failures."""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, FrozenSet, Optional, TypeVar

from config import Config
from celebration.errors import GenerationError
from utils.logger import get_logger

logger = get_logger("celebration.retry")

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class FailureClass(str, Enum):
    """Coarse classification of a failed Gemini call."""
    INTERNAL = "internal"
    RATE_LIMITED = "rate_limited"
    OTHER = "other"


_INTERNAL_MARKERS = ('"code":500', '"code": 500', "INTERNAL")
_RATE_LIMIT_MARKERS = ('"code":429', '"code": 429', "RESOURCE_EXHAUSTED")


def classify_error(error: BaseException) -> FailureClass:
    """
    Map an exception from the Gemini SDK to a FailureClass.

    google-genai errors carry a numeric ``code``; anything else is matched on
    the status markers Gemini puts in its error payloads.
    """
    code = getattr(error, "code", None)
    if code == 500:
        return FailureClass.INTERNAL
    if code == 429:
        return FailureClass.RATE_LIMITED

    message = str(error)
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return FailureClass.RATE_LIMITED
    if any(marker in message for marker in _INTERNAL_MARKERS):
        return FailureClass.INTERNAL
    return FailureClass.OTHER


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    delay: float
    failure_class: FailureClass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry schedule.

    Attempt numbers start at 1. The delay awaited after a failed attempt ``k``
    (before attempt ``k + 1``) is ``initial_delay * 2 ** (k - 1)`` seconds.
    """
    max_attempts: int = 3
    initial_delay: float = 1.0
    retryable: FrozenSet[FailureClass] = field(
        default_factory=lambda: frozenset({FailureClass.INTERNAL, FailureClass.RATE_LIMITED})
    )

    @classmethod
    def from_config(cls) -> "RetryPolicy":
        return cls(
            max_attempts=Config.GEMINI_MAX_ATTEMPTS,
            initial_delay=Config.GEMINI_RETRY_INITIAL_DELAY,
        )

    def delay_for(self, attempt: int) -> float:
        return self.initial_delay * (2 ** (attempt - 1))

    def decide(self, error: BaseException, attempt: int) -> RetryDecision:
        failure_class = classify_error(error)
        if failure_class in self.retryable and attempt < self.max_attempts:
            return RetryDecision(True, self.delay_for(attempt), failure_class)
        return RetryDecision(False, 0.0, failure_class)


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: Optional[Sleep] = None,
) -> T:
    """
    Await ``operation`` until it succeeds or the policy gives up.

    Attempts run strictly one after another. A non-retryable failure, or the
    failure of the last attempt, is re-raised unchanged.
    """
    sleep = sleep or asyncio.sleep

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            decision = policy.decide(e, attempt)
            logger.error(
                f"Error calling Gemini API (Attempt {attempt}/{policy.max_attempts}, "
                f"{decision.failure_class.value}): {e}"
            )
            if not decision.retry:
                raise
            logger.info(f"Retriable error detected. Retrying in {decision.delay:.2f}s...")
            await sleep(decision.delay)

    raise GenerationError("Gemini API call failed after all retries.")
