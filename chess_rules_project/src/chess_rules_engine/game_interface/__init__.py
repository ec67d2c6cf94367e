"""
对局接口模块

包含对局会话和局面存档。
"""

from .game_session import GameSession, GameState, TurnStatus
from .position_store import PositionStore, dumps, loads

__all__ = ['GameSession', 'GameState', 'TurnStatus', 'PositionStore', 'dumps', 'loads']
