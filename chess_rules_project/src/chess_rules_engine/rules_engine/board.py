"""
国际象棋棋盘数据结构

定义兵种、执子方、坐标、格子和8x8棋盘的表示与基本操作。
"""

from enum import IntEnum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from ..utils.exceptions import InvalidCoordinateError

BOARD_SIZE = 8


class Rank(IntEnum):
    """兵种（数值与存档格式一致）"""
    EMPTY = 0
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        """棋盘显示用的字母"""
        return _RANK_SYMBOLS[self]

    @classmethod
    def from_name(cls, name: str) -> 'Rank':
        """
        从兵种名称创建

        Args:
            name: 名称，如 "queen"（不区分大小写）

        Returns:
            Rank: 对应兵种
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"未知的兵种名称: {name}") from None


_RANK_SYMBOLS = {
    Rank.EMPTY: ' ', Rank.PAWN: 'p', Rank.ROOK: 'R', Rank.KNIGHT: 'N',
    Rank.BISHOP: 'B', Rank.QUEEN: 'Q', Rank.KING: 'K'
}


class Owner(IntEnum):
    """执子方（数值与存档格式一致）"""
    NONE = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2

    @property
    def opponent(self) -> 'Owner':
        """对手"""
        if self == Owner.PLAYER_ONE:
            return Owner.PLAYER_TWO
        if self == Owner.PLAYER_TWO:
            return Owner.PLAYER_ONE
        return Owner.NONE


class Coordinate(NamedTuple):
    """
    棋盘坐标 (行, 列)

    (0, 0) 为标准开局时一号玩家第一个车所在的角。
    记法中列用字母 A - H 表示，行用数字 1 - 8 表示。
    """
    row: int
    column: int

    def is_valid(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.column < BOARD_SIZE

    def offset(self, d_row: int, d_column: int) -> 'Coordinate':
        return Coordinate(self.row + d_row, self.column + d_column)

    def to_notation(self) -> str:
        """转换为记法，如 (1, 4) -> "E2" """
        return f"{chr(ord('A') + self.column)}{self.row + 1}"

    @classmethod
    def from_notation(cls, notation: str) -> 'Coordinate':
        """
        从记法创建坐标

        Args:
            notation: 记法字符串，如 "E2" 或 "e2"

        Returns:
            Coordinate: 坐标
        """
        text = notation.strip().upper()
        if len(text) != 2 or not ('A' <= text[0] <= 'H') or not ('1' <= text[1] <= '8'):
            raise InvalidCoordinateError(notation, "请使用 A1 - H8")
        return cls(int(text[1]) - 1, ord(text[0]) - ord('A'))


class Square(NamedTuple):
    """格子内容 (兵种, 执子方)"""
    rank: Rank
    owner: Owner

    @property
    def is_empty(self) -> bool:
        return self.rank == Rank.EMPTY


EMPTY_SQUARE = Square(Rank.EMPTY, Owner.NONE)

# 标准开局的底线排列
BACK_RANK = [Rank.ROOK, Rank.KNIGHT, Rank.BISHOP, Rank.QUEEN,
             Rank.KING, Rank.BISHOP, Rank.KNIGHT, Rank.ROOK]


class Board:
    """
    国际象棋棋盘类

    8x8的棋盘，每个格子保存 (兵种, 执子方)。棋盘只归持有它的一方所有：
    任何假设性的走法都必须在 clone() 得到的独立副本上进行。
    """

    def __init__(self):
        """创建空棋盘"""
        self.ranks = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        self.owners = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)

    @classmethod
    def standard(cls) -> 'Board':
        """
        创建标准开局

        Returns:
            Board: 一号玩家在第0、1行，二号玩家在第6、7行
        """
        board = cls()
        for column, rank in enumerate(BACK_RANK):
            board.set((0, column), Square(rank, Owner.PLAYER_ONE))
            board.set((1, column), Square(Rank.PAWN, Owner.PLAYER_ONE))
            board.set((6, column), Square(Rank.PAWN, Owner.PLAYER_TWO))
            board.set((7, column), Square(rank, Owner.PLAYER_TWO))
        return board

    @classmethod
    def from_matrices(cls, ranks: np.ndarray, owners: np.ndarray) -> 'Board':
        """
        从兵种矩阵和执子方矩阵创建棋盘

        Args:
            ranks: 8x8兵种矩阵
            owners: 8x8执子方矩阵

        Returns:
            Board: 棋盘对象
        """
        board = cls()
        ranks = np.asarray(ranks)
        owners = np.asarray(owners)
        if ranks.shape != (BOARD_SIZE, BOARD_SIZE) or owners.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"棋盘矩阵尺寸错误: {ranks.shape}, {owners.shape}, 应为(8, 8)")
        for row in range(BOARD_SIZE):
            for column in range(BOARD_SIZE):
                board.set((row, column), Square(Rank(int(ranks[row, column])),
                                                Owner(int(owners[row, column]))))
        return board

    def to_matrices(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        转换为矩阵格式

        Returns:
            Tuple[np.ndarray, np.ndarray]: (兵种矩阵, 执子方矩阵) 的副本
        """
        return self.ranks.copy(), self.owners.copy()

    # ==================== 基本访问 ====================

    @staticmethod
    def _coordinate(pos) -> Coordinate:
        coord = Coordinate(*pos)
        if not coord.is_valid():
            raise InvalidCoordinateError(tuple(pos), "坐标超出棋盘范围")
        return coord

    def get(self, pos) -> Square:
        """
        获取指定位置的格子

        Args:
            pos: 位置坐标 (行, 列)

        Returns:
            Square: 格子内容
        """
        row, column = self._coordinate(pos)
        return Square(Rank(int(self.ranks[row, column])), Owner(int(self.owners[row, column])))

    def set(self, pos, square: Square) -> None:
        """
        设置指定位置的格子

        Args:
            pos: 位置坐标 (行, 列)
            square: 格子内容，执子方为NONE当且仅当兵种为EMPTY
        """
        row, column = self._coordinate(pos)
        rank, owner = Rank(square[0]), Owner(square[1])
        if (rank == Rank.EMPTY) != (owner == Owner.NONE):
            raise ValueError(f"格子内容不一致: {rank.name} / {owner.name}")
        self.ranks[row, column] = rank
        self.owners[row, column] = owner

    def clear(self, pos) -> None:
        """清空指定位置"""
        self.set(pos, EMPTY_SQUARE)

    def clone(self) -> 'Board':
        """
        创建棋盘的独立深拷贝

        Returns:
            Board: 棋盘副本
        """
        board = Board()
        board.ranks = self.ranks.copy()
        board.owners = self.owners.copy()
        return board

    def restore_from(self, other: 'Board') -> None:
        """用另一个棋盘的内容覆盖本棋盘"""
        np.copyto(self.ranks, other.ranks)
        np.copyto(self.owners, other.owners)

    # ==================== 查询 ====================

    def squares(self) -> Iterator[Tuple[Coordinate, Square]]:
        """按行优先顺序遍历所有格子"""
        for row in range(BOARD_SIZE):
            for column in range(BOARD_SIZE):
                coord = Coordinate(row, column)
                yield coord, self.get(coord)

    def pieces_of(self, owner: Owner, include_king: bool = True) -> List[Coordinate]:
        """
        获取某一方所有棋子的位置

        Args:
            owner: 执子方
            include_king: 是否包含王

        Returns:
            List[Coordinate]: 行优先顺序的坐标列表
        """
        return [
            coord for coord, square in self.squares()
            if square.owner == owner and (include_king or square.rank != Rank.KING)
        ]

    def find_king(self, owner: Owner) -> Optional[Coordinate]:
        """
        找到指定玩家的王（行优先顺序的第一个）

        Args:
            owner: 执子方

        Returns:
            Optional[Coordinate]: 王的位置，如果找不到返回None
        """
        for coord, square in self.squares():
            if square.owner == owner and square.rank == Rank.KING:
                return coord
        return None

    def count_pieces(self) -> Dict[Tuple[Owner, Rank], int]:
        """
        统计棋子数量

        Returns:
            Dict[Tuple[Owner, Rank], int]: {(执子方, 兵种): 数量}
        """
        counts = {}
        for _, square in self.squares():
            if not square.is_empty:
                key = (square.owner, square.rank)
                counts[key] = counts.get(key, 0) + 1
        return counts

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 可视化的棋盘字符串，行号在右侧
        """
        line = "-" + "-----" * BOARD_SIZE
        lines = [" " + "".join(f" {chr(ord('A') + c)}   " for c in range(BOARD_SIZE)), line]
        for row in range(BOARD_SIZE):
            cells = []
            for column in range(BOARD_SIZE):
                square = self.get((row, column))
                if square.is_empty:
                    cells.append("    ")
                else:
                    cells.append(f" {square.rank.symbol}{int(square.owner)} ")
            lines.append("|" + "|".join(cells) + f"|  {row + 1}")
            lines.append(line)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"Board(pieces={int(np.count_nonzero(self.ranks))})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return False
        return (np.array_equal(self.ranks, other.ranks) and
                np.array_equal(self.owners, other.owners))

    def __hash__(self) -> int:
        return hash((self.ranks.tobytes(), self.owners.tobytes()))
