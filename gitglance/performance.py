"""Performance logging utilities for repository scans."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Optional, Any, Generator


@dataclass
class PerformanceMetrics:
    """Performance metrics for a timed operation."""
    operation: str
    duration: float
    start_time: float
    end_time: float
    context: Optional[Dict[str, Any]] = None
    success: bool = True


class PerformanceLogger:
    """
    Timing utilities for scan operations.

    Keeps the most recent metrics per operation name so callers and tests
    can inspect how long the last run of each operation took.
    """

    def __init__(self, logger_name: str = 'gitglance.performance'):
        self.logger = logging.getLogger(logger_name)
        self._metrics: Dict[str, PerformanceMetrics] = {}

    @contextmanager
    def time_operation(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
        log_level: int = logging.DEBUG
    ) -> Generator[None, None, None]:
        """
        Context manager for timing operations.

        Args:
            operation: Name of the operation being timed
            context: Additional context information
            log_level: Logging level for performance messages
        """
        start_time = time.time()
        self.logger.log(log_level, f"Starting {operation}")

        success = True
        try:
            yield
        except Exception as e:
            success = False
            self.logger.log(log_level, f"{operation} failed after {time.time() - start_time:.3f}s: {e}")
            raise
        finally:
            end_time = time.time()
            duration = end_time - start_time

            self._metrics[operation] = PerformanceMetrics(
                operation=operation,
                duration=duration,
                start_time=start_time,
                end_time=end_time,
                context=context,
                success=success
            )

            if success:
                self.logger.log(log_level, f"{operation} completed in {duration:.3f}s")
                if context:
                    context_str = ", ".join(f"{k}={v}" for k, v in context.items())
                    self.logger.debug(f"{operation} context: {context_str}")

    def get_metrics(self, operation: str) -> Optional[PerformanceMetrics]:
        """Get the most recent metrics recorded for ``operation``."""
        return self._metrics.get(operation)


# Global performance logger instance
_performance_logger: Optional[PerformanceLogger] = None


def get_performance_logger() -> PerformanceLogger:
    """Get the global performance logger instance."""
    global _performance_logger
    if _performance_logger is None:
        _performance_logger = PerformanceLogger()
    return _performance_logger
