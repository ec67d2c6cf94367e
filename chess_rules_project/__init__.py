"""
国际象棋规则引擎 (Chess Rules)

一个验证走法、执行走法并判定将军与将死的国际象棋规则引擎。
"""

__version__ = "0.1.0"
__author__ = "Chess Rules Team"
__description__ = "国际象棋规则引擎 - 走法验证、将军检测与将死判定"

from chess_rules_project.src import chess_rules_engine

__all__ = [
    "chess_rules_engine",
    "__version__",
    "__author__",
    "__description__",
]
