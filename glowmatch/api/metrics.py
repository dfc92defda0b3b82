"""Metrics service for tracking recommendation performance.

Singleton service counting recommendation requests, their latency and how
many products they returned.
"""

import threading
from typing import Dict


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters for recommendation calls.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(MetricsService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize metrics counters."""
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._reset_counters()
        self._initialized = True

    def _reset_counters(self) -> None:
        self._recommendation_count = 0
        self._failure_count = 0
        self._products_returned = 0
        self._total_latency_ms = 0.0
        self._min_latency_ms = float("inf")
        self._max_latency_ms = 0.0

    def record_recommendation(self, latency_ms: float, returned: int) -> None:
        """Record a served recommendation request.

        Args:
            latency_ms: Latency in milliseconds
            returned: Number of products in the response
        """
        with self._lock:
            self._recommendation_count += 1
            self._products_returned += returned
            self._total_latency_ms += latency_ms
            self._min_latency_ms = min(self._min_latency_ms, latency_ms)
            self._max_latency_ms = max(self._max_latency_ms, latency_ms)

    def record_failure(self) -> None:
        """Record a recommendation request that failed."""
        with self._lock:
            self._failure_count += 1

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with metrics including:
            - recommendation_count: Served recommendation requests
            - failure_count: Failed recommendation requests
            - average_products_returned: Mean response size
            - average_latency_ms / min_latency_ms / max_latency_ms
        """
        with self._lock:
            count = self._recommendation_count
            avg_latency = self._total_latency_ms / count if count > 0 else 0.0
            avg_returned = self._products_returned / count if count > 0 else 0.0

            return {
                "recommendation_count": count,
                "failure_count": self._failure_count,
                "average_products_returned": round(avg_returned, 2),
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": round(self._min_latency_ms, 2) if count > 0 else 0.0,
                "max_latency_ms": round(self._max_latency_ms, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._reset_counters()


# Global singleton instance
metrics_service = MetricsService()
