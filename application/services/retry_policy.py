from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from core.logging import StructuredLogger


TransientPredicate = Callable[[BaseException], bool]
Supplier = Callable[[], Awaitable[Any]]


def always_transient(_: BaseException) -> bool:
    return True


@dataclass(slots=True)
class RetryPolicy:
    """Bounded retry of an async supplier.

    ``backoff_factor=1.0`` gives a fixed delay between attempts. The last
    error is re-raised once attempts run out or the error is not transient.
    """
    max_attempts: int
    backoff_base_ms: int
    backoff_factor: float = 1.0
    jitter_ms: int = 0

    @classmethod
    def fixed(cls, attempts: int, delay_ms: int) -> "RetryPolicy":
        return cls(max_attempts=max(1, attempts), backoff_base_ms=max(0, delay_ms))

    def delay_ms(self, attempt: int) -> int:
        return int(self.backoff_base_ms * math.pow(self.backoff_factor, attempt - 1)) + self.jitter_ms

    async def run(
        self,
        supplier: Supplier,
        *,
        logger: StructuredLogger,
        is_transient: TransientPredicate = always_transient,
        label: Optional[str] = None,
    ) -> Any:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await supplier()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                transient = is_transient(e)
                logger.warning(
                    lambda: f"{label or 'retry'} attempt {attempt}/{self.max_attempts} failed "
                            f"({'transient' if transient else 'terminal'}): {e}"
                )
                if attempt >= self.max_attempts or not transient:
                    raise
                await asyncio.sleep(self.delay_ms(attempt) / 1000.0)
