"""
测试BoardValidator类的功能

测试残局编辑器的棋子数量、王、兵位置、将死状态和格子一致性验证。
"""

import pytest

from chess_rules_project.src.chess_rules_engine.config import ScenarioConfig
from chess_rules_project.src.chess_rules_engine.rules_engine import (
    Board, BoardValidator, Coordinate, Owner, Rank, Square, EMPTY_SQUARE
)

P1 = Owner.PLAYER_ONE
P2 = Owner.PLAYER_TWO


def place(board, pieces):
    """按 {记法: (兵种, 执子方)} 摆放棋子"""
    for notation, (rank, owner) in pieces.items():
        board.set(Coordinate.from_notation(notation), Square(rank, owner))
    return board


class TestBoardValidator:
    """BoardValidator类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.validator = BoardValidator()

    def test_standard_position_valid(self):
        """测试标准开局通过验证"""
        is_valid, errors = self.validator.full_validation(Board.standard())
        assert is_valid
        assert errors == []

    def test_empty_board(self):
        """测试空棋盘"""
        is_valid, errors = self.validator.full_validation(Board())

        assert not is_valid
        assert any("王数量错误" in e for e in errors)
        assert any("棋子总数不足" in e for e in errors)

    def test_piece_limits(self):
        """测试兵种数量上限"""
        board = Board.standard()
        board.set((3, 3), Square(Rank.QUEEN, P1))

        is_valid, errors = self.validator.validate_piece_counts(board)
        assert not is_valid
        assert len(errors) == 1
        assert "queen" in errors[0]

    def test_kings(self):
        """测试每一方恰好一个王"""
        board = Board.standard()
        board.set((3, 3), Square(Rank.KING, P2))

        is_valid, errors = self.validator.validate_kings(board)
        assert not is_valid
        assert len(errors) == 1

        # 多出的王只报告一次
        _, all_errors = self.validator.full_validation(board)
        assert len([e for e in all_errors if "王" in e]) == 1

    def test_pawn_on_promotion_rank(self):
        """测试兵停在升变行"""
        board = place(Board(), {
            'E1': (Rank.KING, P1),
            'E8': (Rank.KING, P2),
            'A8': (Rank.PAWN, P1),
            'H1': (Rank.PAWN, P2),
            'B1': (Rank.PAWN, P1),
        })

        is_valid, errors = self.validator.validate_pawn_ranks(board)
        assert not is_valid
        assert len(errors) == 2

    def test_min_pieces(self):
        """测试只有两个王的局面"""
        board = place(Board(), {'E1': (Rank.KING, P1), 'E8': (Rank.KING, P2)})

        is_valid, _ = self.validator.validate_min_pieces(board)
        assert not is_valid

        board.set((1, 0), Square(Rank.PAWN, P1))
        is_valid, _ = self.validator.validate_min_pieces(board)
        assert is_valid

    def test_checkmated_position(self):
        """测试已被将死的残局"""
        board = place(Board(), {
            'E1': (Rank.KING, P1),
            'A8': (Rank.QUEEN, P1),
            'H8': (Rank.KING, P2),
            'G7': (Rank.PAWN, P2),
            'H7': (Rank.PAWN, P2),
        })

        is_valid, errors = self.validator.validate_not_checkmated(board)
        assert not is_valid
        assert "已被将死" in errors[0]

        # 被将军但没有被将死
        board.clear((6, 7))
        is_valid, _ = self.validator.validate_not_checkmated(board)
        assert is_valid

    def test_corrupted_squares(self):
        """测试直接写入矩阵造成的格子不一致"""
        board = Board.standard()
        board.ranks[3, 3] = Rank.PAWN
        board.owners[4, 4] = 9

        is_valid, errors = self.validator.validate_square_invariants(board)
        assert not is_valid
        assert len(errors) == 2

        # 格子数据损坏时不继续其他检查
        is_valid, all_errors = self.validator.full_validation(board)
        assert not is_valid
        assert all_errors == errors

    def test_can_place(self):
        """测试放置棋子前的数量检查"""
        board = Board.standard()

        allowed, message = self.validator.can_place(board, (3, 3), Square(Rank.QUEEN, P1))
        assert not allowed
        assert message

        # 原地替换同一个棋子不算新增
        allowed, _ = self.validator.can_place(board, (0, 3), Square(Rank.QUEEN, P1))
        assert allowed

        allowed, _ = self.validator.can_place(board, (3, 3), EMPTY_SQUARE)
        assert allowed

        board.clear((1, 0))
        allowed, _ = self.validator.can_place(board, (3, 3), Square(Rank.PAWN, P1))
        assert allowed

    def test_custom_limits(self):
        """测试自定义数量上限"""
        config = ScenarioConfig(piece_limits={'pawn': 8, 'rook': 2, 'knight': 2,
                                              'bishop': 2, 'queen': 2, 'king': 1})
        validator = BoardValidator(config=config)

        board = Board.standard()
        board.set((3, 3), Square(Rank.QUEEN, P1))
        is_valid, _ = validator.validate_piece_counts(board)
        assert is_valid

    def test_validation_report(self):
        """测试验证报告"""
        report = self.validator.get_validation_report(Board.standard())

        assert report['overall_valid']
        assert report['total_errors'] == 0
        assert set(report['validations']) == {
            'square_invariants', 'piece_counts', 'kings', 'pawn_ranks',
            'min_pieces', 'not_checkmated'
        }

        report = self.validator.get_validation_report(Board())
        assert not report['overall_valid']
        assert 'not_checkmated' not in report['validations']
        assert report['validations']['kings']['error_count'] == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
