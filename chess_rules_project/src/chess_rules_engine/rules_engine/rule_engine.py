"""
国际象棋规则引擎

把走法验证、攻击检测、攻击路径和将死判定组合成对外接口。
"""

from typing import Any, Dict, List, Optional

from .attack_detector import AttackDetector
from .attack_path import AttackPathResolver
from .board import Board, Coordinate, Owner
from .checkmate_resolver import CheckmateResolver, MateStatus
from .move import LegalityResult, Move, MoveMode
from .move_validator import MoveValidator, PromotionProvider
from ..config.engine_config import EngineConfig


class RuleEngine:
    """
    国际象棋规则引擎

    负责验证走法、检测将军和判定将死。引擎本身在调用之间不保存状态，
    唯一被修改的是调用方以PLAY或SIMULATE_APPLY模式传入的棋盘。
    """

    def __init__(self, promotion_provider: Optional[PromotionProvider] = None,
                 config: Optional[EngineConfig] = None):
        """
        初始化规则引擎

        Args:
            promotion_provider: 对局模式下的升变回调
            config: 走法验证配置
        """
        self.validator = MoveValidator(promotion_provider, config)
        self.detector = AttackDetector(self.validator)
        self.path_resolver = AttackPathResolver()
        self.checkmate_resolver = CheckmateResolver(self.validator, self.detector, self.path_resolver)

    def evaluate(self, board: Board, from_pos, to_pos, mover: Owner,
                 mode: MoveMode = MoveMode.PROBE) -> LegalityResult:
        """验证走法，合法时按模式执行"""
        return self.validator.evaluate(board, from_pos, to_pos, mover, mode)

    def evaluate_move(self, board: Board, move: Move,
                      mode: MoveMode = MoveMode.PROBE) -> LegalityResult:
        return self.validator.evaluate_move(board, move, mode)

    def king_in_check(self, board: Board, player: Owner, attacker_threshold: int = 0) -> bool:
        return self.detector.king_in_check(board, player, attacker_threshold)

    def is_attacked_by_opponent(self, board: Board, defender: Owner, target) -> bool:
        return self.detector.is_attacked_by_opponent(board, defender, target)

    def find_attacker(self, board: Board, defender: Owner, target) -> Optional[Coordinate]:
        return self.detector.find_attacker(board, defender, target)

    def interposition_squares(self, attacker, king) -> List[Coordinate]:
        return self.path_resolver.interposition_squares(attacker, king)

    def resolve(self, board: Board, player: Owner) -> MateStatus:
        """判定被将军的玩家是否已被将死"""
        return self.checkmate_resolver.resolve(board, player)

    def is_checkmate(self, board: Board, player: Owner) -> bool:
        return self.checkmate_resolver.is_checkmate(board, player)

    def game_status(self, board: Board, player: Owner) -> Dict[str, Any]:
        """
        获取某一方的局面状态

        Args:
            board: 棋盘状态
            player: 玩家

        Returns:
            Dict: 局面状态信息
        """
        player = Owner(player)
        king_pos = board.find_king(player)

        status = {
            'player': player,
            'king': king_pos,
            'in_check': False,
            'double_check': False,
            'attackers': [],
            'mate_status': MateStatus.NOT_MATE,
        }

        if king_pos is None:
            status['mate_status'] = MateStatus.INDETERMINATE
            return status

        status['attackers'] = self.detector.attackers_of(board, player, king_pos)
        status['in_check'] = len(status['attackers']) > 0
        status['double_check'] = len(status['attackers']) > 1

        if status['in_check']:
            status['mate_status'] = self.resolve(board, player)

        return status
