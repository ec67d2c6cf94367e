"""
国际象棋规则引擎

给定局面，判断走法是否合法、执行合法走法，并判定王是否被将军或将死。
包括规则引擎、对局会话、局面存档和配置管理。
"""

__version__ = "0.1.0"
__author__ = "Chess Rules Team"

from .rules_engine import (
    Board, Coordinate, Owner, Rank, Square, Move, MoveMode, IllegalMove, LegalityResult,
    MateStatus, RuleEngine, BoardValidator
)
from .game_interface import GameSession, PositionStore
from .config import ConfigManager, EngineConfig, ScenarioConfig, StorageConfig, SystemConfig
from .utils import setup_logger, get_logger, ChessRulesError

__all__ = [
    "__version__", "__author__",
    "Board", "Coordinate", "Owner", "Rank", "Square",
    "Move", "MoveMode", "IllegalMove", "LegalityResult", "MateStatus",
    "RuleEngine", "BoardValidator", "GameSession", "PositionStore",
    "ConfigManager", "EngineConfig", "ScenarioConfig", "StorageConfig", "SystemConfig",
    "setup_logger", "get_logger", "ChessRulesError"
]
