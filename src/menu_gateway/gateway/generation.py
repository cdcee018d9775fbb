"""
Generation result tracking.

Captures the model attempts made for one request so the route can log which
provider/model produced the payload and how many fallbacks were needed.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ModelAttempt:
    """
    One adapter call made by the gateway.

    Attributes:
        model: Model identifier that was called
        outcome: success, fallback or error
        upstream_status: Provider HTTP status when the call failed with one
        latency_ms: Wall time of the adapter call
    """

    model: str
    outcome: str
    upstream_status: Optional[int] = None
    latency_ms: int = 0


@dataclass(frozen=True)
class GenerationResult:
    """
    Parsed provider payload plus the attempt history that produced it.

    Attributes:
        payload: Parsed JSON returned by the provider (opaque menu payload)
        provider: Provider name that produced the payload
        model: Model that produced the payload
        attempts: Every model attempt, in call order
    """

    payload: Any
    provider: str
    model: str
    attempts: tuple[ModelAttempt, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.attempts:
            raise ValueError("attempts must not be empty")
        if self.attempts[-1].outcome != "success":
            raise ValueError("last attempt of a result must be a success")

    @property
    def fallback_count(self) -> int:
        return sum(1 for attempt in self.attempts if attempt.outcome == "fallback")
