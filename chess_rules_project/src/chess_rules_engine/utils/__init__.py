"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import (
    setup_logger, setup_logger_from_config, get_logger, LoggerMixin, PerformanceLogger, performance_logger
)
from .exceptions import (
    ChessRulesError, InvalidMoveError, InvalidCoordinateError, GameStateError,
    PositionFormatError, ConfigurationError
)

__all__ = [
    'setup_logger', 'setup_logger_from_config', 'get_logger', 'LoggerMixin', 'PerformanceLogger', 'performance_logger',
    'ChessRulesError', 'InvalidMoveError', 'InvalidCoordinateError', 'GameStateError',
    'PositionFormatError', 'ConfigurationError'
]
