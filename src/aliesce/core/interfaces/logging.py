from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """Logging calls made by the pipeline components.

    Components receive one of these instead of reaching for a module-level
    logger, so a caller can route status lines ('Bypassing script no. N'),
    per-script errors and the run summary wherever it wants.
    """

    def debug(self, msg: str, *args, **kwargs) -> None: ...

    def info(self, msg: str, *args, **kwargs) -> None: ...

    def error(self, msg: str, *args, **kwargs) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Hands out one logger per component name ('stages', 'io.exec', ...)."""

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        ...
