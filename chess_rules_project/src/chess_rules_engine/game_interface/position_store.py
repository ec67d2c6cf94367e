"""
局面存档

以文本格式保存和加载局面：第一行为轮到走子的玩家（1或2），
之后按行优先顺序写出64个 "兵种 执子方" 整数对，每行棋盘占一行。
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..config.engine_config import StorageConfig
from ..rules_engine.board import BOARD_SIZE, Board, Coordinate, Owner, Rank, Square
from ..utils.exceptions import PositionFormatError

logger = logging.getLogger(__name__)

# 槽位0为对局存档，1-3为残局存档
GAMESTATE_SLOT = 0
SCENARIO_SLOTS = (1, 2, 3)


def dumps(board: Board, turn: Owner) -> str:
    """
    把局面转换为存档文本

    Args:
        board: 棋盘
        turn: 轮到走子的玩家

    Returns:
        str: 存档文本
    """
    turn = Owner(turn)
    if turn == Owner.NONE:
        raise ValueError("轮到走子的玩家不能为NONE")

    lines = [f"{int(turn)} "]
    for row in range(BOARD_SIZE):
        pairs = []
        for column in range(BOARD_SIZE):
            square = board.get((row, column))
            pairs.append(f"{int(square.rank)} {int(square.owner)} ")
        lines.append("".join(pairs))
    return "\n".join(lines) + "\n"


def loads(text: str, source: str = "<string>") -> Tuple[Board, Owner]:
    """
    从存档文本恢复局面

    Args:
        text: 存档文本
        source: 数据来源，用于错误信息

    Returns:
        Tuple[Board, Owner]: (棋盘, 轮到走子的玩家)
    """
    try:
        values = [int(token) for token in text.split()]
    except ValueError as e:
        raise PositionFormatError(source, f"包含非整数内容: {e}") from e

    if not values:
        raise PositionFormatError(source, "文件为空")

    turn_value, squares = values[0], values[1:]
    if turn_value not in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
        raise PositionFormatError(source, f"无效的走子方: {turn_value}")

    expected = BOARD_SIZE * BOARD_SIZE * 2
    if len(squares) < expected:
        raise PositionFormatError(source, f"格子数据不足: {len(squares) // 2}/{BOARD_SIZE * BOARD_SIZE}")

    board = Board()
    for index in range(BOARD_SIZE * BOARD_SIZE):
        rank_value, owner_value = squares[2 * index], squares[2 * index + 1]
        coord = Coordinate(index // BOARD_SIZE, index % BOARD_SIZE)
        try:
            board.set(coord, Square(Rank(rank_value), Owner(owner_value)))
        except ValueError as e:
            raise PositionFormatError(
                source, f"无效的格子 {coord.to_notation()}: ({rank_value}, {owner_value})"
            ) from e

    return board, Owner(turn_value)


class PositionStore:
    """
    局面存档管理

    管理对局存档和三个残局存档槽位。
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()
        self.save_dir = Path(self.config.save_dir)

    def slot_path(self, slot: int) -> Path:
        """
        获取槽位对应的文件路径

        Args:
            slot: 0为对局存档，1-3为残局存档

        Returns:
            Path: 文件路径
        """
        if slot == GAMESTATE_SLOT:
            return self.save_dir / self.config.gamestate_file
        if slot in SCENARIO_SLOTS:
            return self.save_dir / self.config.scenario_files[slot - 1]
        raise ValueError(f"无效的存档槽位: {slot}")

    def save_to_file(self, board: Board, turn: Owner, filepath) -> Path:
        """保存局面到指定文件"""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(dumps(board, turn))
        logger.info(f"局面已保存: {path}")
        return path

    def load_from_file(self, filepath) -> Tuple[Board, Owner]:
        """从指定文件加载局面"""
        path = Path(filepath)
        with open(path, 'r', encoding='utf-8') as f:
            board, turn = loads(f.read(), source=str(path))
        logger.info(f"局面已加载: {path}")
        return board, turn

    def save(self, board: Board, turn: Owner, slot: int = GAMESTATE_SLOT) -> Path:
        """保存局面到槽位"""
        return self.save_to_file(board, turn, self.slot_path(slot))

    def load(self, slot: int = GAMESTATE_SLOT) -> Tuple[Board, Owner]:
        """从槽位加载局面"""
        return self.load_from_file(self.slot_path(slot))

    def exists(self, slot: int = GAMESTATE_SLOT) -> bool:
        return self.slot_path(slot).exists()
