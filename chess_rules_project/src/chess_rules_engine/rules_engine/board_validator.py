"""
棋局合法性验证器

提供残局编辑器所需的局面验证功能：棋子数量、王的数量、兵的位置和将死状态。
"""

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .board import BOARD_SIZE, Board, Owner, Rank, Square
from .move_validator import PAWN_LAST_ROW
from .rule_engine import RuleEngine
from .checkmate_resolver import MateStatus
from ..config.engine_config import ScenarioConfig

PLAYER_NAMES = {Owner.PLAYER_ONE: "一号玩家", Owner.PLAYER_TWO: "二号玩家"}


class BoardValidator:
    """
    棋局合法性验证器

    验证一个编辑好的残局能否开始对局。
    """

    def __init__(self, engine: Optional[RuleEngine] = None, config: Optional[ScenarioConfig] = None):
        """
        初始化验证器

        Args:
            engine: 规则引擎，用于将死检查
            config: 残局编辑器配置
        """
        self.engine = engine or RuleEngine()
        self.config = config or ScenarioConfig()
        self.piece_limits = {Rank.from_name(name): limit
                             for name, limit in self.config.piece_limits.items()}

    def validate_square_invariants(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证棋盘结构和格子内容的一致性

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        if board.ranks.shape != (BOARD_SIZE, BOARD_SIZE) or board.owners.shape != (BOARD_SIZE, BOARD_SIZE):
            errors.append(f"棋盘尺寸错误: {board.ranks.shape}, 应为(8, 8)")
            return False, errors

        valid_ranks = [int(r) for r in Rank]
        valid_owners = [int(o) for o in Owner]
        for row in range(BOARD_SIZE):
            for column in range(BOARD_SIZE):
                rank = int(board.ranks[row, column])
                owner = int(board.owners[row, column])
                if rank not in valid_ranks or owner not in valid_owners:
                    errors.append(f"格子数值越界: ({row}, {column}) = ({rank}, {owner})")
                elif (rank == Rank.EMPTY) != (owner == Owner.NONE):
                    errors.append(f"格子内容不一致: ({row}, {column}) = ({rank}, {owner})")

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证每一方各兵种的数量上限

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        counts = board.count_pieces()

        for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
            for rank, limit in self.piece_limits.items():
                if rank == Rank.KING:
                    # 由 validate_kings 检查
                    continue
                count = counts.get((owner, rank), 0)
                if count > limit:
                    errors.append(f"{PLAYER_NAMES[owner]}的{rank.name.lower()}数量超限: {count} > {limit}")

        return len(errors) == 0, errors

    def validate_kings(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证每一方恰好有一个王

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        counts = board.count_pieces()

        for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
            count = counts.get((owner, Rank.KING), 0)
            if count != 1:
                errors.append(f"{PLAYER_NAMES[owner]}的王数量错误: {count}, 应为1")

        return len(errors) == 0, errors

    def validate_pawn_ranks(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证没有兵停在己方的升变行上

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
            last_row = PAWN_LAST_ROW[owner]
            pawn_columns = np.nonzero((board.ranks[last_row] == Rank.PAWN) &
                                      (board.owners[last_row] == owner))[0]
            for column in pawn_columns:
                errors.append(f"{PLAYER_NAMES[owner]}的兵位于升变行: ({last_row}, {int(column)})")

        return len(errors) == 0, errors

    def validate_min_pieces(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证棋子总数（只剩两个王时无法分出胜负）

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        total = sum(board.count_pieces().values())
        if total < self.config.min_pieces:
            return False, [f"棋子总数不足: {total} < {self.config.min_pieces}"]
        return True, []

    def validate_not_checkmated(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证双方都没有被将死

        要求每一方恰好有一个王。

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
            if not self.engine.king_in_check(board, owner, 0):
                continue
            status = self.engine.resolve(board, owner)
            if status is MateStatus.MATE:
                errors.append(f"{PLAYER_NAMES[owner]}已被将死")
            elif status is MateStatus.INDETERMINATE:
                errors.append(f"无法判定{PLAYER_NAMES[owner]}是否被将死")

        return len(errors) == 0, errors

    def can_place(self, board: Board, pos, square: Square) -> Tuple[bool, str]:
        """
        检查在指定位置放置棋子后是否超出数量上限

        Args:
            board: 棋盘
            pos: 放置位置
            square: 要放置的格子内容（EMPTY表示清空）

        Returns:
            Tuple[bool, str]: (是否允许, 错误信息)
        """
        rank, owner = Rank(square[0]), Owner(square[1])
        if rank == Rank.EMPTY:
            return True, ""

        count = board.count_pieces().get((owner, rank), 0)
        if board.get(pos) == Square(rank, owner):
            count -= 1

        limit = self.piece_limits.get(rank)
        if limit is not None and count + 1 > limit:
            return False, f"放置无效: {rank.name.lower()}数量已达上限 {count}/{limit}"
        return True, ""

    def full_validation(self, board: Board) -> Tuple[bool, List[str]]:
        """
        完整的残局验证

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        is_valid, errors = self.validate_square_invariants(board)
        if not is_valid:
            # 格子数据损坏时无法继续其他检查
            return False, errors

        all_errors = []
        for validation_func in (self.validate_piece_counts,
                                self.validate_kings,
                                self.validate_pawn_ranks,
                                self.validate_min_pieces):
            _, errors = validation_func(board)
            all_errors.extend(errors)

        kings_valid, _ = self.validate_kings(board)
        if kings_valid:
            _, errors = self.validate_not_checkmated(board)
            all_errors.extend(errors)

        return len(all_errors) == 0, all_errors

    def get_validation_report(self, board: Board) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Args:
            board: 要验证的棋盘

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'validations': {}
        }

        validation_tests = {
            'square_invariants': self.validate_square_invariants,
            'piece_counts': self.validate_piece_counts,
            'kings': self.validate_kings,
            'pawn_ranks': self.validate_pawn_ranks,
            'min_pieces': self.validate_min_pieces,
            'not_checkmated': self.validate_not_checkmated,
        }

        for test_name, test_func in validation_tests.items():
            if test_name != 'square_invariants' and not report['validations']['square_invariants']['valid']:
                break
            if test_name == 'not_checkmated' and not report['validations']['kings']['valid']:
                continue

            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }

            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report
