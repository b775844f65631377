"""Debounced recalculation of cart pricing.

Edits to the linked fields arrive keystroke by keystroke. The scheduler waits
for a quiet window before issuing a calculation, and each issued calculation
gets a generation number: only the newest generation may update
``last_result``. Responses from superseded generations are dropped when they
arrive. A failed calculation leaves the previous result in place.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pos_pricing.core.config import get_settings
from pos_pricing.services.pricing.allocation import PricingInput, PricingResult

logger = logging.getLogger(__name__)

CalculateFn = Callable[[PricingInput], Awaitable[PricingResult]]
ResultCallback = Callable[[PricingResult], None]
ErrorCallback = Callable[[Exception], None]


class RecalculationScheduler:
    """Issues at most one live calculation per settle window."""

    def __init__(
        self,
        calculate: CalculateFn,
        *,
        debounce_seconds: float | None = None,
        on_result: ResultCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        if debounce_seconds is None:
            debounce_seconds = get_settings().recalc_debounce_seconds
        if debounce_seconds < 0:
            raise ValueError("Debounce window cannot be negative")
        self._calculate = calculate
        self._debounce_seconds = debounce_seconds
        self._on_result = on_result
        self._on_error = on_error
        self._generation = 0
        self._pending: asyncio.Task[None] | None = None
        self._pending_input: PricingInput | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self.last_result: PricingResult | None = None
        self.last_error: Exception | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    def request(self, pricing_input: PricingInput) -> None:
        """Schedule a calculation, restarting the settle window."""
        self._cancel_pending()
        self._pending_input = pricing_input
        self._pending = asyncio.get_running_loop().create_task(
            self._debounced(pricing_input)
        )

    async def flush(self) -> PricingResult | None:
        """Issue any pending calculation now and wait for everything in flight."""
        pricing_input = self._pending_input
        self._cancel_pending()
        if pricing_input is not None:
            self._start(pricing_input)
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
        return self.last_result

    def cancel(self) -> None:
        """Drop pending work and ignore results still in flight."""
        self._cancel_pending()
        self._generation += 1

    async def wait_idle(self) -> None:
        """Wait until nothing is pending or in flight."""
        while self._pending is not None or self._inflight:
            if self._pending is not None:
                await asyncio.gather(self._pending, return_exceptions=True)
            if self._inflight:
                await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel every outstanding task."""
        self.cancel()
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._pending_input = None

    async def _debounced(self, pricing_input: PricingInput) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self._pending = None
        self._pending_input = None
        self._start(pricing_input)

    def _start(self, pricing_input: PricingInput) -> asyncio.Task[None]:
        self._generation += 1
        task = asyncio.get_running_loop().create_task(
            self._run(self._generation, pricing_input)
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _run(self, generation: int, pricing_input: PricingInput) -> None:
        try:
            result = await self._calculate(pricing_input)
        except Exception as exc:
            if generation != self._generation:
                logger.debug("Ignoring failure from superseded request %s", generation)
                return
            self.last_error = exc
            logger.warning(
                "Pricing recalculation %s failed; keeping last result: %s",
                generation,
                exc,
            )
            if self._on_error is not None:
                self._on_error(exc)
            return

        if generation != self._generation:
            logger.debug("Discarding stale pricing result %s", generation)
            return
        self.last_result = result
        self.last_error = None
        if self._on_result is not None:
            self._on_result(result)


__all__ = ["CalculateFn", "RecalculationScheduler"]
