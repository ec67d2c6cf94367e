"""
测试Board类的功能

测试棋盘创建、格子访问、坐标记法和棋盘复制等功能。
"""

import pytest
import numpy as np

from chess_rules_project.src.chess_rules_engine.rules_engine import (
    Board, Coordinate, Owner, Rank, Square, EMPTY_SQUARE
)
from chess_rules_project.src.chess_rules_engine.utils import InvalidCoordinateError


class TestBoard:
    """Board类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.board = Board.standard()

    def test_empty_board(self):
        """测试空棋盘"""
        board = Board()
        assert all(square == EMPTY_SQUARE for _, square in board.squares())
        assert board.find_king(Owner.PLAYER_ONE) is None
        assert board.count_pieces() == {}

    def test_standard_setup(self):
        """测试标准开局"""
        assert self.board.get((0, 0)) == Square(Rank.ROOK, Owner.PLAYER_ONE)
        assert self.board.get((0, 4)) == Square(Rank.KING, Owner.PLAYER_ONE)
        assert self.board.get((1, 3)) == Square(Rank.PAWN, Owner.PLAYER_ONE)
        assert self.board.get((6, 3)) == Square(Rank.PAWN, Owner.PLAYER_TWO)
        assert self.board.get((7, 3)) == Square(Rank.QUEEN, Owner.PLAYER_TWO)
        assert self.board.get((4, 4)).is_empty

        counts = self.board.count_pieces()
        assert sum(counts.values()) == 32
        assert counts[(Owner.PLAYER_ONE, Rank.PAWN)] == 8
        assert counts[(Owner.PLAYER_TWO, Rank.KNIGHT)] == 2

        assert self.board.find_king(Owner.PLAYER_ONE) == Coordinate(0, 4)
        assert self.board.find_king(Owner.PLAYER_TWO) == Coordinate(7, 4)

    def test_set_and_clear(self):
        """测试设置和清空格子"""
        self.board.set((3, 3), Square(Rank.BISHOP, Owner.PLAYER_TWO))
        assert self.board.get((3, 3)) == Square(Rank.BISHOP, Owner.PLAYER_TWO)

        self.board.clear((3, 3))
        assert self.board.get((3, 3)) == EMPTY_SQUARE

    def test_square_invariant(self):
        """测试执子方为NONE当且仅当兵种为EMPTY"""
        with pytest.raises(ValueError):
            self.board.set((3, 3), Square(Rank.PAWN, Owner.NONE))

        with pytest.raises(ValueError):
            self.board.set((3, 3), Square(Rank.EMPTY, Owner.PLAYER_ONE))

        assert self.board.get((3, 3)).is_empty

    def test_out_of_range_access(self):
        """测试越界访问"""
        with pytest.raises(InvalidCoordinateError):
            self.board.get((8, 0))

        with pytest.raises(InvalidCoordinateError):
            self.board.set((0, -1), Square(Rank.PAWN, Owner.PLAYER_ONE))

    def test_clone_is_independent(self):
        """测试棋盘副本相互独立"""
        copy_board = self.board.clone()
        assert copy_board == self.board

        copy_board.clear((1, 4))
        copy_board.set((3, 4), Square(Rank.PAWN, Owner.PLAYER_ONE))

        assert copy_board != self.board
        assert self.board.get((1, 4)) == Square(Rank.PAWN, Owner.PLAYER_ONE)
        assert self.board.get((3, 4)).is_empty

    def test_restore_from(self):
        """测试从另一个棋盘恢复内容"""
        snapshot = self.board.clone()
        self.board.clear((0, 0))
        self.board.restore_from(snapshot)

        assert self.board == snapshot
        # 恢复的是内容，不是共享数组
        self.board.clear((0, 0))
        assert snapshot.get((0, 0)) == Square(Rank.ROOK, Owner.PLAYER_ONE)

    def test_matrices_conversion(self):
        """测试矩阵格式转换"""
        ranks, owners = self.board.to_matrices()
        assert ranks.shape == (8, 8)
        assert ranks[0, 3] == Rank.QUEEN
        assert owners[7, 0] == Owner.PLAYER_TWO

        # 返回的是副本
        ranks[0, 0] = Rank.EMPTY
        assert self.board.get((0, 0)).rank == Rank.ROOK

        rebuilt = Board.from_matrices(*self.board.to_matrices())
        assert rebuilt == self.board

    def test_from_matrices_validation(self):
        """测试矩阵格式的验证"""
        with pytest.raises(ValueError):
            Board.from_matrices(np.zeros((8, 7)), np.zeros((8, 7)))

        ranks = np.zeros((8, 8), dtype=int)
        owners = np.zeros((8, 8), dtype=int)
        ranks[2, 2] = Rank.KNIGHT
        with pytest.raises(ValueError):
            Board.from_matrices(ranks, owners)

    def test_pieces_of(self):
        """测试按行优先顺序列出棋子"""
        pieces = self.board.pieces_of(Owner.PLAYER_TWO)
        assert len(pieces) == 16
        assert pieces[0] == Coordinate(6, 0)
        assert pieces[-1] == Coordinate(7, 7)

        without_king = self.board.pieces_of(Owner.PLAYER_TWO, include_king=False)
        assert len(without_king) == 15
        assert Coordinate(7, 4) not in without_king

    def test_visual_string(self):
        """测试可视化字符串"""
        visual = self.board.to_visual_string()
        assert " A " in visual
        assert "K1" in visual
        assert "Q2" in visual
        assert visual.splitlines()[2].endswith("1")


class TestCoordinate:
    """Coordinate和枚举类型的测试"""

    def test_notation(self):
        """测试坐标记法"""
        assert Coordinate(0, 0).to_notation() == "A1"
        assert Coordinate(1, 4).to_notation() == "E2"
        assert Coordinate(7, 7).to_notation() == "H8"

        assert Coordinate.from_notation("e2") == Coordinate(1, 4)
        assert Coordinate.from_notation(" H8 ") == Coordinate(7, 7)

    def test_invalid_notation(self):
        """测试无效的坐标记法"""
        for notation in ("I1", "A9", "A0", "E", "E22", ""):
            with pytest.raises(InvalidCoordinateError):
                Coordinate.from_notation(notation)

    def test_validity_and_offset(self):
        """测试坐标范围和偏移"""
        assert Coordinate(3, 3).offset(1, -1) == Coordinate(4, 2)
        assert Coordinate(7, 7).is_valid()
        assert not Coordinate(7, 7).offset(1, 0).is_valid()
        assert not Coordinate(-1, 0).is_valid()

    def test_owner_opponent(self):
        """测试对手"""
        assert Owner.PLAYER_ONE.opponent == Owner.PLAYER_TWO
        assert Owner.PLAYER_TWO.opponent == Owner.PLAYER_ONE
        assert Owner.NONE.opponent == Owner.NONE

    def test_rank_from_name(self):
        """测试从名称创建兵种"""
        assert Rank.from_name("queen") == Rank.QUEEN
        assert Rank.from_name("Knight") == Rank.KNIGHT

        with pytest.raises(ValueError):
            Rank.from_name("cannon")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
