"""
走法验证器

实现各兵种的走法规则、路径阻挡检查和走法执行。
"""

from typing import Callable, Iterator, Optional, Tuple

from .board import Board, Coordinate, Owner, Rank, Square, EMPTY_SQUARE
from .move import IllegalMove, LegalityResult, Move, MoveMode
from ..config.engine_config import EngineConfig
from ..utils.exceptions import ConfigurationError
from ..utils.logger import LoggerMixin

# 升变可选兵种
PROMOTION_RANKS = (Rank.ROOK, Rank.KNIGHT, Rank.BISHOP, Rank.QUEEN)

# 兵的起始行和底线（升变行）
PAWN_START_ROW = {Owner.PLAYER_ONE: 1, Owner.PLAYER_TWO: 6}
PAWN_LAST_ROW = {Owner.PLAYER_ONE: 7, Owner.PLAYER_TWO: 0}

PromotionProvider = Callable[[Board, Move], Rank]

# 形状检查的失败结果: (原因, 诊断信息)
ShapeFailure = Optional[Tuple[IllegalMove, str]]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def step_direction(origin: Coordinate, target: Coordinate) -> Tuple[int, int]:
    """
    计算从起点指向终点的单位方向向量

    Args:
        origin: 起点
        target: 终点

    Returns:
        Tuple[int, int]: 行、列方向，各为 -1、0 或 1
    """
    return _sign(target.row - origin.row), _sign(target.column - origin.column)


def squares_between(origin: Coordinate, target: Coordinate) -> Iterator[Coordinate]:
    """
    沿直线或斜线遍历起点与终点之间（不含两端）的格子

    调用方需保证两点在同一行、同一列或同一斜线上。
    """
    d_row, d_column = step_direction(origin, target)
    current = origin.offset(d_row, d_column)
    while current != target:
        yield current
        current = current.offset(d_row, d_column)


class MoveValidator(LoggerMixin):
    """
    走法验证器

    验证一步走法对走子方是否合法；根据模式决定是否执行走法和输出诊断信息。
    不记录走法历史，也不处理王车易位和吃过路兵。
    """

    def __init__(self, promotion_provider: Optional[PromotionProvider] = None,
                 config: Optional[EngineConfig] = None):
        """
        初始化走法验证器

        Args:
            promotion_provider: 对局模式下兵到达底线时提供升变兵种的回调
            config: 走法验证配置
        """
        self.config = config or EngineConfig()
        self.promotion_provider = promotion_provider

        try:
            self.default_promotion = Rank.from_name(self.config.default_promotion)
        except ValueError as e:
            raise ConfigurationError('engine.default_promotion', str(e)) from e
        if self.default_promotion not in PROMOTION_RANKS:
            raise ConfigurationError('engine.default_promotion',
                                     f"兵不能升变为 {self.config.default_promotion}")

        self._shape_checks = {
            Rank.PAWN: self._check_pawn,
            Rank.ROOK: self._check_rook,
            Rank.KNIGHT: self._check_knight,
            Rank.BISHOP: self._check_bishop,
            Rank.QUEEN: self._check_queen,
            Rank.KING: self._check_king,
        }

    def evaluate(self, board: Board, from_pos, to_pos, mover: Owner,
                 mode: MoveMode = MoveMode.PROBE) -> LegalityResult:
        """
        验证走法，合法时按模式执行

        Args:
            board: 棋盘（PROBE模式下不会被修改）
            from_pos: 起始位置 (行, 列)
            to_pos: 目标位置 (行, 列)
            mover: 走子方
            mode: 验证模式

        Returns:
            LegalityResult: 合法性结果
        """
        from_pos = Coordinate(*from_pos)
        to_pos = Coordinate(*to_pos)
        mover = Owner(mover)

        if from_pos == to_pos:
            return self._reject(mode, IllegalMove.SAME_SQUARE)

        piece = board.get(from_pos)
        if piece.is_empty:
            return self._reject(mode, IllegalMove.EMPTY_SOURCE)
        if piece.owner != mover:
            return self._reject(mode, IllegalMove.WRONG_OWNER)

        target = board.get(to_pos)

        failure = self._shape_checks[piece.rank](board, from_pos, to_pos, piece, target)
        if failure is not None:
            return self._reject(mode, *failure)

        if target.owner == mover:
            return self._reject(mode, IllegalMove.FRIENDLY_CAPTURE)

        if mode is MoveMode.PROBE:
            return LegalityResult.success(applied=False)

        promoted_to = self._promotion_rank(board, Move(from_pos, to_pos, mover), piece, mode)
        moved_rank = promoted_to or piece.rank

        board.set(to_pos, Square(moved_rank, piece.owner))
        board.set(from_pos, EMPTY_SQUARE)

        return LegalityResult.success(applied=True, promoted_to=promoted_to)

    def evaluate_move(self, board: Board, move: Move,
                      mode: MoveMode = MoveMode.PROBE) -> LegalityResult:
        """验证Move对象表示的走法"""
        return self.evaluate(board, move.from_pos, move.to_pos, move.mover, mode)

    def is_legal(self, board: Board, from_pos, to_pos, mover: Owner) -> bool:
        """只验证不执行的快捷方法"""
        return self.evaluate(board, from_pos, to_pos, mover, MoveMode.PROBE).ok

    def _reject(self, mode: MoveMode, reason: IllegalMove, message: str = "") -> LegalityResult:
        result = LegalityResult.failure(reason, message)
        if mode is MoveMode.PLAY and self.config.verbose_diagnostics:
            self.log_info(result.message)
        return result

    def _promotion_rank(self, board: Board, move: Move, piece: Square,
                        mode: MoveMode) -> Optional[Rank]:
        """兵到达底线时确定升变兵种，否则返回None"""
        if piece.rank != Rank.PAWN or move.to_pos.row != PAWN_LAST_ROW[piece.owner]:
            return None

        if mode is MoveMode.PLAY and self.promotion_provider is not None:
            rank = Rank(self.promotion_provider(board, move))
            if rank not in PROMOTION_RANKS:
                raise ValueError(f"兵不能升变为 {rank.name}")
            return rank

        return self.default_promotion

    # ==================== 各兵种走法规则 ====================

    def _check_pawn(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                    piece: Square, target: Square) -> ShapeFailure:
        """兵：直走一步（起始行可走两步），斜走一步只能吃子"""
        forward = 1 if piece.owner == Owner.PLAYER_ONE else -1
        d_column = abs(to_pos.column - from_pos.column)
        steps = (to_pos.row - from_pos.row) * forward

        if d_column > 1:
            return IllegalMove.INVALID_SHAPE, "兵通常只能直走，吃子时才能斜走"

        max_steps = 2 if from_pos.row == PAWN_START_ROW[piece.owner] else 1
        if steps < 1 or steps > max_steps:
            return IllegalMove.INVALID_SHAPE, "兵每次只能向前走一步（首步最多两步）"

        if d_column == 1:
            if steps != 1:
                return IllegalMove.INVALID_SHAPE, "兵只能斜向前走一格吃子"
            if target.is_empty:
                return IllegalMove.INVALID_SHAPE, "兵只有吃子时才能斜走"
            return None

        if not target.is_empty:
            return IllegalMove.BLOCKED_PATH, IllegalMove.BLOCKED_PATH.description
        if steps == 2 and not board.get(from_pos.offset(forward, 0)).is_empty:
            return IllegalMove.BLOCKED_PATH, IllegalMove.BLOCKED_PATH.description
        return None

    def _check_rook(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                    piece: Square, target: Square) -> ShapeFailure:
        """车：横走或竖走，路径不能被阻挡"""
        if from_pos.row != to_pos.row and from_pos.column != to_pos.column:
            return IllegalMove.INVALID_SHAPE, "车只能横走或竖走"
        return self._check_path(board, from_pos, to_pos)

    def _check_knight(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                      piece: Square, target: Square) -> ShapeFailure:
        """马：走日字，可以越过其他棋子"""
        displacement = sorted((abs(to_pos.row - from_pos.row), abs(to_pos.column - from_pos.column)))
        if displacement != [1, 2]:
            return IllegalMove.INVALID_SHAPE, "马必须竖走两格加横走一格，或反之"
        return None

    def _check_bishop(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                      piece: Square, target: Square) -> ShapeFailure:
        """象：斜走，路径不能被阻挡"""
        if abs(to_pos.row - from_pos.row) != abs(to_pos.column - from_pos.column):
            return IllegalMove.INVALID_SHAPE, "象只能斜走"
        return self._check_path(board, from_pos, to_pos)

    def _check_queen(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                     piece: Square, target: Square) -> ShapeFailure:
        """后：车的走法或象的走法"""
        d_row = abs(to_pos.row - from_pos.row)
        d_column = abs(to_pos.column - from_pos.column)
        if d_row == 0 or d_column == 0 or d_row == d_column:
            return self._check_path(board, from_pos, to_pos)
        return IllegalMove.INVALID_SHAPE, "后只能沿横、竖或斜线走"

    def _check_king(self, board: Board, from_pos: Coordinate, to_pos: Coordinate,
                    piece: Square, target: Square) -> ShapeFailure:
        """王：走到相邻的格子"""
        if abs(to_pos.row - from_pos.row) > 1 or abs(to_pos.column - from_pos.column) > 1:
            return IllegalMove.INVALID_SHAPE, "王只能走到相邻的格子"
        return None

    def _check_path(self, board: Board, from_pos: Coordinate, to_pos: Coordinate) -> ShapeFailure:
        """车、象、后共用的路径检查"""
        for coord in squares_between(from_pos, to_pos):
            if not board.get(coord).is_empty:
                return IllegalMove.BLOCKED_PATH, IllegalMove.BLOCKED_PATH.description
        return None
