"""
Request coalescing (Singleflight) for the token exchange.

When several coroutines need the same value concurrently, only one actually
runs the call; the others wait and receive the same result or exception.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger("knawat_suppliers.singleflight")


@dataclass
class InFlightCall:
    """A call currently being executed by its leader."""

    future: "asyncio.Future"
    subscribers: int
    started_at: float


@dataclass
class SingleflightResult(Generic[T]):
    """Result of a coalesced call."""

    value: T
    shared: bool
    subscribers: int


class Singleflight:
    """
    Singleflight - coalescing of concurrent identical calls.

    Example:
        sf = Singleflight()

        # These 10 concurrent calls perform a single token exchange
        results = await asyncio.gather(
            *[sf.do("token", client.refresh_token) for _ in range(10)]
        )

        results[0].shared  # False (the leader)
        results[1].shared  # True (joined existing)
    """

    def __init__(self) -> None:
        self._in_flight: Dict[str, InFlightCall] = {}

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> SingleflightResult[T]:
        """Run ``fn`` unless a call for ``key`` is already in flight, then share its outcome.

        The call runs in its own task. Cancelling any caller, the leader
        included, only abandons that caller's wait; the shared call keeps
        running for the others.
        """
        existing = self._in_flight.get(key)
        if existing is not None:
            existing.subscribers += 1
            logger.debug(f"Singleflight.do: joined {key!r}, subscribers={existing.subscribers}")
            value = await asyncio.shield(existing.future)
            return SingleflightResult(value=value, shared=True, subscribers=existing.subscribers)

        future = asyncio.ensure_future(fn())
        in_flight = InFlightCall(future=future, subscribers=1, started_at=time.time())
        self._in_flight[key] = in_flight
        logger.debug(f"Singleflight.do: leading {key!r}")

        def _done(task: "asyncio.Future") -> None:
            if self._in_flight.get(key) is in_flight:
                del self._in_flight[key]
            if not task.cancelled():
                # Mark the outcome retrieved even if every caller went away.
                task.exception()
            logger.debug(
                f"Singleflight.do: completed {key!r} in "
                f"{time.time() - in_flight.started_at:.3f}s, subscribers={in_flight.subscribers}"
            )

        # Registered before any waiter so the entry is gone when callers resume.
        future.add_done_callback(_done)

        value = await asyncio.shield(future)
        return SingleflightResult(value=value, shared=False, subscribers=in_flight.subscribers)

    def is_in_flight(self, key: str) -> bool:
        """Check if a call is currently in flight."""
        return key in self._in_flight

    def get_subscribers(self, key: str) -> int:
        """Get the number of subscribers for an in-flight call."""
        existing = self._in_flight.get(key)
        return existing.subscribers if existing else 0
