from .executor import ExecutorProtocol
from .fs import FileSystemProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol

__all__ = [
    'ExecutorProtocol',
    'FileSystemProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
]
