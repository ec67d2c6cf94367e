"""
走法数据结构

定义走法、验证模式和走法合法性结果的表示。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Coordinate, Owner, Rank


class MoveMode(Enum):
    """
    走法验证模式

    PLAY: 实际对局，输出诊断信息，合法则执行（兵到底线时询问升变）
    PROBE: 只验证，不修改棋盘，不输出诊断信息
    SIMULATE_APPLY: 合法则执行，升变自动取默认兵种，不输出诊断信息
    """
    PLAY = "play"
    PROBE = "probe"
    SIMULATE_APPLY = "simulate_apply"


class IllegalMove(Enum):
    """非法走法原因"""
    SAME_SQUARE = "same_square"
    EMPTY_SOURCE = "empty_source"
    WRONG_OWNER = "wrong_owner"
    INVALID_SHAPE = "invalid_shape"
    BLOCKED_PATH = "blocked_path"
    FRIENDLY_CAPTURE = "friendly_capture"
    # 只由对局会话使用：走完后己方的王处于被将军状态
    LEAVES_KING_IN_CHECK = "leaves_king_in_check"

    @property
    def description(self) -> str:
        return _ILLEGAL_MOVE_DESCRIPTIONS[self]


_ILLEGAL_MOVE_DESCRIPTIONS = {
    IllegalMove.SAME_SQUARE: "目标格与起始格相同，请选择另一个目标格",
    IllegalMove.EMPTY_SOURCE: "不能移动空格",
    IllegalMove.WRONG_OWNER: "这个棋子不属于你",
    IllegalMove.INVALID_SHAPE: "该棋子不能这样移动",
    IllegalMove.BLOCKED_PATH: "走法被阻挡",
    IllegalMove.FRIENDLY_CAPTURE: "不能吃自己的棋子",
    IllegalMove.LEAVES_KING_IN_CHECK: "这步棋会让自己的王处于被将军状态",
}


@dataclass
class LegalityResult:
    """
    走法合法性结果

    ok为True时applied表示棋盘是否真的被修改（PROBE模式下为False）；
    ok为False时reason给出原因，message为可读的诊断信息。
    """
    ok: bool
    applied: bool = False
    reason: Optional[IllegalMove] = None
    message: str = ""
    promoted_to: Optional[Rank] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, applied: bool, promoted_to: Optional[Rank] = None) -> 'LegalityResult':
        return cls(ok=True, applied=applied, promoted_to=promoted_to)

    @classmethod
    def failure(cls, reason: IllegalMove, message: str = "") -> 'LegalityResult':
        return cls(ok=False, reason=reason, message=message or reason.description)


@dataclass
class Move:
    """
    走法类

    表示一个临时的走法：起始位置、目标位置和走子方，不会被持久化。
    """
    from_pos: Coordinate
    to_pos: Coordinate
    mover: Owner

    def __post_init__(self):
        """初始化后规范化并验证坐标"""
        self.from_pos = Coordinate(*self.from_pos)
        self.to_pos = Coordinate(*self.to_pos)
        self.mover = Owner(self.mover)
        for pos in (self.from_pos, self.to_pos):
            if not pos.is_valid():
                raise ValueError(f"无效的位置坐标: {tuple(pos)}")

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "E2E4"
        """
        return f"{self.from_pos.to_notation()}{self.to_pos.to_notation()}"

    @classmethod
    def from_coordinate_notation(cls, notation: str, mover: Owner) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "E2E4"，允许中间有空格
            mover: 走子方

        Returns:
            Move: Move对象
        """
        text = "".join(notation.split())
        if len(text) != 4:
            raise ValueError(f"无效的坐标记法: {notation}")

        return cls(
            from_pos=Coordinate.from_notation(text[:2]),
            to_pos=Coordinate.from_notation(text[2:]),
            mover=mover
        )

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'from_pos': tuple(self.from_pos),
            'to_pos': tuple(self.to_pos),
            'mover': int(self.mover),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        """从字典创建Move对象"""
        return cls(
            from_pos=tuple(data['from_pos']),
            to_pos=tuple(data['to_pos']),
            mover=Owner(data['mover'])
        )
