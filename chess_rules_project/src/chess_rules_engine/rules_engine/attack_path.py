"""
攻击路径

计算车、象、后对王的攻击线上可以垫子的格子。
"""

from typing import List

from .board import Coordinate, Rank
from .move_validator import step_direction

# 可以沿直线滑行的兵种
SLIDING_RANKS = (Rank.ROOK, Rank.BISHOP, Rank.QUEEN)


def interposition_squares(attacker, king) -> List[Coordinate]:
    """
    计算攻击者与王之间可以垫子的格子

    假设攻击者是车、象或后，并且与王在同一行、列或斜线上且路径畅通。
    从攻击者出发沿方向逐格前进，收集王之前的每一格；两者相邻时返回空列表。

    Args:
        attacker: 攻击者位置
        king: 王的位置

    Returns:
        List[Coordinate]: 从攻击者到王依次排列的格子
    """
    attacker = Coordinate(*attacker)
    king = Coordinate(*king)
    if attacker == king:
        raise ValueError(f"攻击者与王位置相同: {tuple(king)}")
    d_row, d_column = step_direction(attacker, king)

    path = []
    position = attacker
    while position.offset(d_row, d_column) != king:
        position = position.offset(d_row, d_column)
        if not position.is_valid():
            # 不在同一条线上，调用方违反了前置条件
            raise ValueError(f"{tuple(attacker)} 与 {tuple(king)} 不在同一条直线或斜线上")
        path.append(position)

    return path


class AttackPathResolver:
    """攻击路径解析器"""

    @staticmethod
    def is_sliding(rank: Rank) -> bool:
        """兵种是否可以被垫子阻挡"""
        return Rank(rank) in SLIDING_RANKS

    def interposition_squares(self, attacker, king) -> List[Coordinate]:
        return interposition_squares(attacker, king)
