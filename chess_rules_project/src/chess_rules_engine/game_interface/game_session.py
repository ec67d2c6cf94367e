"""
对局会话

驱动规则引擎完成回合流程：回合开始时检查将军与将死，
走子后拒绝让己方王处于被将军状态的走法并回滚棋盘。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.engine_config import EngineConfig
from ..rules_engine.board import Board, Owner
from ..rules_engine.checkmate_resolver import MateStatus
from ..rules_engine.move import IllegalMove, LegalityResult, Move, MoveMode
from ..rules_engine.move_validator import PromotionProvider
from ..rules_engine.rule_engine import RuleEngine
from ..utils.exceptions import GameStateError, InvalidMoveError
from ..utils.logger import LoggerMixin


class GameState(Enum):
    """对局状态枚举"""
    PLAYING = "playing"         # 对局进行中
    CHECKMATE = "checkmate"     # 已将死
    ABORTED = "aborted"         # 局面异常，已中止


@dataclass
class TurnStatus:
    """回合开始时的状态"""
    player: Owner
    in_check: bool
    mate_status: Optional[MateStatus] = None


class GameSession(LoggerMixin):
    """
    对局会话

    持有实际对局的棋盘和上一步之后的棋盘副本，用于回滚非法走法。
    """

    def __init__(self, board: Optional[Board] = None,
                 player_to_move: Owner = Owner.PLAYER_ONE,
                 engine: Optional[RuleEngine] = None,
                 promotion_provider: Optional[PromotionProvider] = None,
                 config: Optional[EngineConfig] = None):
        """
        初始化对局会话

        Args:
            board: 初始棋盘，None表示标准开局
            player_to_move: 先走的一方
            engine: 规则引擎
            promotion_provider: 兵升变回调（未提供engine时使用）
            config: 走法验证配置（未提供engine时使用）
        """
        self.engine = engine or RuleEngine(promotion_provider, config)
        self.board = board if board is not None else Board.standard()
        self.previous_board = self.board.clone()
        self.player_to_move = Owner(player_to_move)

        self.state = GameState.PLAYING
        self.winner: Optional[Owner] = None
        self.move_count = 0
        self.last_move: Optional[Move] = None

    @property
    def is_over(self) -> bool:
        return self.state is not GameState.PLAYING

    def _require_king(self, player: Owner):
        """走子方没有王时中止对局"""
        if self.board.find_king(player) is None:
            self.state = GameState.ABORTED
            self.log_error(f"找不到{player.name}的王，对局中止")
            raise GameStateError(f"{player.name}没有王", "局面不完整，对局中止")

    def start_turn(self) -> TurnStatus:
        """
        回合开始：检查走子方是否被将军，被将军时判定将死

        Returns:
            TurnStatus: 回合状态

        Raises:
            GameStateError: 走子方没有王或无法判定将死
        """
        player = self.player_to_move
        self._require_king(player)
        in_check = self.engine.king_in_check(self.board, player, 0)
        status = TurnStatus(player=player, in_check=in_check)

        if not in_check:
            return status

        status.mate_status = self.engine.resolve(self.board, player)

        if status.mate_status is MateStatus.MATE:
            self.state = GameState.CHECKMATE
            self.winner = player.opponent
            self.log_info(f"{player.name}被将死，{self.winner.name}获胜")
        elif status.mate_status is MateStatus.INDETERMINATE:
            self.state = GameState.ABORTED
            raise GameStateError(f"{player.name}的将死判定", "局面不完整，对局中止")
        else:
            self.log_info(f"{player.name}被将军")

        return status

    def try_move(self, from_pos, to_pos) -> LegalityResult:
        """
        尝试为当前走子方走一步

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            LegalityResult: 合法性结果；成功时轮到对方走子
        """
        if self.is_over:
            raise GameStateError(f"对局状态为 {self.state.value}", "不能继续走子")

        player = self.player_to_move
        self._require_king(player)
        result = self.engine.evaluate(self.board, from_pos, to_pos, player, MoveMode.PLAY)
        if not result.ok:
            return result

        if self.engine.king_in_check(self.board, player, 0):
            if self.engine.king_in_check(self.previous_board, player, 0):
                message = "王仍被将军，必须解除将军"
            else:
                message = IllegalMove.LEAVES_KING_IN_CHECK.description
            self.log_info(message)
            self.board.restore_from(self.previous_board)
            return LegalityResult.failure(IllegalMove.LEAVES_KING_IN_CHECK, message)

        self.previous_board.restore_from(self.board)
        self.last_move = Move(from_pos, to_pos, player)
        self.move_count += 1
        self.player_to_move = player.opponent
        return result

    def make_move(self, from_pos, to_pos) -> LegalityResult:
        """
        走一步，非法时抛出异常

        Raises:
            InvalidMoveError: 走法不合法
        """
        result = self.try_move(from_pos, to_pos)
        if not result.ok:
            move_str = Move(from_pos, to_pos, self.player_to_move).to_coordinate_notation()
            raise InvalidMoveError(move_str, result.message)
        return result
