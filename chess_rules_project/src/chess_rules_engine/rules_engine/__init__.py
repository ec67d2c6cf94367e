"""
国际象棋规则引擎模块

包含棋局表示、走法验证、将军检测和将死判定等核心功能。
"""

from .board import Board, Coordinate, Owner, Rank, Square, EMPTY_SQUARE
from .move import Move, MoveMode, IllegalMove, LegalityResult
from .move_validator import MoveValidator
from .attack_detector import AttackDetector
from .attack_path import AttackPathResolver, interposition_squares
from .checkmate_resolver import CheckmateResolver, MateStatus
from .rule_engine import RuleEngine
from .board_validator import BoardValidator

__all__ = [
    'Board', 'Coordinate', 'Owner', 'Rank', 'Square', 'EMPTY_SQUARE',
    'Move', 'MoveMode', 'IllegalMove', 'LegalityResult',
    'MoveValidator', 'AttackDetector', 'AttackPathResolver', 'interposition_squares',
    'CheckmateResolver', 'MateStatus', 'RuleEngine', 'BoardValidator'
]
