"""
将死判定

在已知王被将军的前提下，穷举所有应将方式（移动王、吃掉攻击者、垫子），
证明或否定将死。
"""

from enum import Enum
from typing import Optional

from .attack_detector import AttackDetector
from .attack_path import AttackPathResolver
from .board import Board, Owner, Rank
from .move import MoveMode
from .move_validator import MoveValidator
from ..utils.logger import LoggerMixin, performance_logger

# 王可以走到的8个相邻方向
KING_OFFSETS = [(d_row, d_column)
                for d_row in (-1, 0, 1)
                for d_column in (-1, 0, 1)
                if (d_row, d_column) != (0, 0)]


class MateStatus(Enum):
    """将死判定结果"""
    NOT_MATE = "not_mate"
    MATE = "mate"
    # 防御性结果：棋局不完整（例如找不到王），不应出现在合法棋局中
    INDETERMINATE = "indeterminate"


class CheckmateResolver(LoggerMixin):
    """
    将死判定器

    所有假设性的走法都在棋盘副本上进行，传入的棋盘不会被修改。
    前置条件：每一方恰好有一个王，且调用方已确认该玩家正被将军。
    """

    def __init__(self, validator: Optional[MoveValidator] = None,
                 detector: Optional[AttackDetector] = None,
                 path_resolver: Optional[AttackPathResolver] = None):
        self.validator = validator or MoveValidator()
        self.detector = detector or AttackDetector(self.validator)
        self.path_resolver = path_resolver or AttackPathResolver()

    def resolve(self, board: Board, player: Owner) -> MateStatus:
        """
        判定被将军的玩家是否已被将死

        Args:
            board: 棋盘状态
            player: 被将军的玩家

        Returns:
            MateStatus: 判定结果
        """
        player = Owner(player)
        with performance_logger.timed('checkmate_resolve'):
            return self._resolve(board, player)

    def _resolve(self, board: Board, player: Owner) -> MateStatus:
        king_pos = board.find_king(player)
        if king_pos is None:
            self.log_error(f"将死判定失败: 找不到{player.name}的王")
            return MateStatus.INDETERMINATE

        scratch = board.clone()

        # 1. 王能否走到一个不被将军的相邻格
        for d_row, d_column in KING_OFFSETS:
            destination = king_pos.offset(d_row, d_column)
            if not destination.is_valid():
                continue

            result = self.validator.evaluate(scratch, king_pos, destination, player,
                                             MoveMode.SIMULATE_APPLY)
            if result.ok:
                if not self.detector.king_in_check(scratch, player, 0):
                    self.log_debug(f"王可以走到 {destination.to_notation()} 解除将军")
                    return MateStatus.NOT_MATE
                # 王可能吃了子，恢复原局面再尝试下一格
                scratch.restore_from(board)

        # 2. 双将时只能靠移动王解围
        if self.detector.king_in_check(board, player, 1):
            return MateStatus.MATE

        # 3. 单个攻击者：能否被吃掉
        attacker_pos = self.detector.find_attacker(scratch, player, king_pos)
        if attacker_pos is None:
            self.log_error(f"将死判定失败: 找不到将军{player.name}的棋子")
            return MateStatus.INDETERMINATE

        defenders = scratch.pieces_of(player, include_king=False)
        for coord in defenders:
            if self.validator.evaluate(scratch, coord, attacker_pos, player, MoveMode.PROBE).ok:
                self.log_debug(f"{coord.to_notation()} 可以吃掉攻击者 {attacker_pos.to_notation()}")
                return MateStatus.NOT_MATE

        # 4. 马和兵的将军无法被阻挡
        attacker_rank = scratch.get(attacker_pos).rank
        if attacker_rank in (Rank.KNIGHT, Rank.PAWN):
            return MateStatus.MATE

        # 5. 能否在攻击线上垫子
        path = self.path_resolver.interposition_squares(attacker_pos, king_pos)
        for coord in defenders:
            for square in path:
                if self.validator.evaluate(scratch, coord, square, player, MoveMode.PROBE).ok:
                    self.log_debug(f"{coord.to_notation()} 可以垫在 {square.to_notation()}")
                    return MateStatus.NOT_MATE

        return MateStatus.MATE

    def is_checkmate(self, board: Board, player: Owner) -> bool:
        """
        检查指定玩家是否被将死

        先确认被将军再进行判定；INDETERMINATE 视为未被将死。
        """
        if not self.detector.king_in_check(board, player, 0):
            return False
        return self.resolve(board, player) is MateStatus.MATE
