"""
Timing utilities for performance measurement.

Provides a Timer class that can be used as a context manager or decorator.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

from fairvalue.logging_config import get_logger

logger = get_logger(__name__)


class Timer:
    """
    Context manager and decorator for timing code execution.

    Example as context manager:
        with Timer("Batch valuation"):
            evaluate_instruments(instruments)

    Example as decorator:
        @Timer.decorator("Recommendation")
        def recommend():
            ...

    Example with debug-level logging:
        with Timer("DCF", use_logging=True, level="DEBUG"):
            model.calculate(data)
    """

    def __init__(
        self,
        name: str = "Operation",
        verbose: bool = True,
        use_logging: bool = True,
        level: str = "INFO",
    ):
        """
        Initialize timer.

        Args:
            name: Name to display in timing messages
            verbose: Whether to emit timing messages at all
            use_logging: Use logger instead of print
            level: Log level used when use_logging is True
        """
        self.name = name
        self.verbose = verbose
        self.use_logging = use_logging
        self.level = level.upper()
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def _output(self, message: str) -> None:
        if self.use_logging:
            logger.log(getattr(logging, self.level, logging.INFO), message)
        else:
            print(message)

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        if self.verbose:
            self._output(f"{self.name}: Starting...")
        return self

    def __exit__(self, *args: Any) -> None:
        if self.start_time is not None:
            self.elapsed = time.perf_counter() - self.start_time
            if self.verbose:
                self._output(f"{self.name}: Completed in {self.elapsed:.3f}s")

    @staticmethod
    def decorator(name: str = "Function", use_logging: bool = True) -> Callable:
        """
        Decorator version of Timer.

        Args:
            name: Name to display in timing messages
            use_logging: Use logger instead of print

        Example:
            @Timer.decorator("Batch evaluation")
            def evaluate():
                ...
        """
        def wrapper(func: Callable) -> Callable:
            @wraps(func)
            def inner(*args: Any, **kwargs: Any) -> Any:
                with Timer(name, use_logging=use_logging):
                    return func(*args, **kwargs)
            return inner
        return wrapper
