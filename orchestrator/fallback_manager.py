import asyncio
from dataclasses import dataclass
from enum import Enum

from models.errors import MalformedResponseError, ProviderUnavailableError
from models.metric_types import Provenance


class FallbackAction(str, Enum):
    LOCAL = "local"
    NEUTRAL_DEFAULT = "neutral_default"


@dataclass(frozen=True)
class FallbackDecision:
    action: FallbackAction
    reason: str

    @property
    def provenance(self) -> Provenance:
        if self.action == FallbackAction.LOCAL:
            return Provenance.LOCAL_FALLBACK
        return Provenance.NEUTRAL_DEFAULT


def failure_reason(exc: BaseException) -> str:
    """Short, stable reason code for a failed AI metric call."""
    if isinstance(exc, ProviderUnavailableError):
        return exc.code
    if isinstance(exc, MalformedResponseError):
        return "malformed_response"
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return "timeout"
    return "unknown"


class FallbackManager:
    """
    Decides what replaces a failed AI metric value.

    Every failure kind (timeout, provider error, malformed payload, rate-limit
    denial, missing key) is handled the same way: the metric's
    ``fallback_to_local`` flag picks between the local heuristic and the
    neutral default.
    """

    def decide(self, *, fallback_to_local: bool, error: BaseException) -> FallbackDecision:
        reason = failure_reason(error)
        if fallback_to_local:
            return FallbackDecision(action=FallbackAction.LOCAL, reason=reason)
        return FallbackDecision(action=FallbackAction.NEUTRAL_DEFAULT, reason=reason)
