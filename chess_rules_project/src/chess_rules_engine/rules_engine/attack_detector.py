"""
攻击检测

基于走法验证器的PROBE模式判断某个格子（特别是王所在的格子）是否受到对方攻击。
"""

from typing import List, Optional

from .board import Board, Coordinate, Owner
from .move import MoveMode
from .move_validator import MoveValidator
from ..utils.logger import LoggerMixin


class AttackDetector(LoggerMixin):
    """
    攻击检测器

    所有检查都按行优先顺序扫描对方棋子，并以PROBE模式尝试走到目标格，
    因此不会修改传入的棋盘。
    """

    def __init__(self, validator: Optional[MoveValidator] = None):
        self.validator = validator or MoveValidator()

    def _attacks(self, board: Board, attacker: Coordinate, target: Coordinate, owner: Owner) -> bool:
        return self.validator.evaluate(board, attacker, target, owner, MoveMode.PROBE).ok

    def is_attacked_by_opponent(self, board: Board, defender: Owner, target) -> bool:
        """
        检查目标格是否能被防守方的对手走到

        Args:
            board: 棋盘状态
            defender: 防守方
            target: 目标格

        Returns:
            bool: 是否受到攻击
        """
        return self.find_attacker(board, defender, target) is not None

    def king_in_check(self, board: Board, player: Owner, attacker_threshold: int = 0) -> bool:
        """
        检查指定玩家的王是否被将军

        attacker_threshold 为0时回答"是否被将军"，为1时回答"是否被两个及以上棋子同时将军"。

        Args:
            board: 棋盘状态
            player: 玩家
            attacker_threshold: 攻击者数量需超过的阈值

        Returns:
            bool: 攻击者数量是否超过阈值
        """
        player = Owner(player)
        king_pos = board.find_king(player)
        if king_pos is None:
            self.log_warning(f"找不到{player.name}的王，视为未被将军")
            return False

        opponent = player.opponent
        check_count = 0
        for coord in board.pieces_of(opponent):
            if self._attacks(board, coord, king_pos, opponent):
                check_count += 1
                if check_count > attacker_threshold:
                    return True

        return False

    def find_attacker(self, board: Board, defender: Owner, target) -> Optional[Coordinate]:
        """
        找到第一个能走到目标格的对方棋子

        Args:
            board: 棋盘状态
            defender: 防守方
            target: 目标格

        Returns:
            Optional[Coordinate]: 攻击者位置，没有则返回None
        """
        target = Coordinate(*target)
        opponent = Owner(defender).opponent
        for coord in board.pieces_of(opponent):
            if self._attacks(board, coord, target, opponent):
                return coord
        return None

    def attackers_of(self, board: Board, defender: Owner, target) -> List[Coordinate]:
        """
        获取所有能走到目标格的对方棋子

        Returns:
            List[Coordinate]: 行优先顺序的攻击者位置
        """
        target = Coordinate(*target)
        opponent = Owner(defender).opponent
        return [coord for coord in board.pieces_of(opponent)
                if self._attacks(board, coord, target, opponent)]
