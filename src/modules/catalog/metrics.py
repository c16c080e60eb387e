"""Creation timing and outcome values."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


class Stopwatch:
    """Accumulating monotonic timer; safe to stop more than once."""

    def __init__(self) -> None:
        self._started: Optional[float] = None
        self._elapsed = 0.0

    @classmethod
    def start_new(cls) -> Stopwatch:
        watch = cls()
        watch.start()
        return watch

    def start(self) -> None:
        if self._started is None:
            self._started = time.perf_counter()

    def stop(self) -> None:
        if self._started is not None:
            self._elapsed += time.perf_counter() - self._started
            self._started = None

    @property
    def elapsed_ms(self) -> float:
        running = 0.0
        if self._started is not None:
            running = time.perf_counter() - self._started
        return round((self._elapsed + running) * 1000, 3)


@dataclass(frozen=True)
class CreationMetrics:
    """Outcome of one product creation call.

    ``success`` is ``False`` exactly when ``error_reason`` is set.
    """

    operation_id: str
    product_name: str
    sku: str
    category: str
    validation_duration_ms: float
    persistence_duration_ms: float
    total_duration_ms: float
    error_reason: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_reason is None

    def as_log_fields(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "product_name": self.product_name,
            "sku": self.sku,
            "category": self.category,
            "validation_duration_ms": self.validation_duration_ms,
            "persistence_duration_ms": self.persistence_duration_ms,
            "total_duration_ms": self.total_duration_ms,
            "success": self.success,
            "error_reason": self.error_reason,
        }
