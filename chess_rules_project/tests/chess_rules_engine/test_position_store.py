"""
局面存档测试

测试存档文本格式、格式错误处理和存档槽位。
"""

import pytest

from chess_rules_project.src.chess_rules_engine.config import StorageConfig
from chess_rules_project.src.chess_rules_engine.game_interface import PositionStore, dumps, loads
from chess_rules_project.src.chess_rules_engine.rules_engine import Board, Owner, Rank, Square
from chess_rules_project.src.chess_rules_engine.utils import PositionFormatError


class TestPositionFormat:
    """测试存档文本格式"""

    def test_dumps_layout(self):
        """测试存档文本的布局"""
        text = dumps(Board.standard(), Owner.PLAYER_ONE)
        lines = text.splitlines()

        assert len(lines) == 9
        assert lines[0].strip() == "1"
        assert lines[1].split() == "2 1 3 1 4 1 5 1 6 1 4 1 3 1 2 1".split()
        assert lines[4].split() == ["0"] * 16
        assert lines[8].split()[:2] == ["2", "2"]

    def test_dumps_requires_player(self):
        """测试轮到走子的玩家不能为NONE"""
        with pytest.raises(ValueError):
            dumps(Board(), Owner.NONE)

    def test_loads(self):
        """测试从存档文本恢复局面"""
        board = Board.standard()
        board.clear((1, 4))
        board.set((3, 4), Square(Rank.PAWN, Owner.PLAYER_ONE))

        restored, turn = loads(dumps(board, Owner.PLAYER_TWO))

        assert restored == board
        assert turn == Owner.PLAYER_TWO

    def test_loads_ignores_whitespace_layout(self):
        """测试加载时只按空白分隔读取整数"""
        values = ["2"] + ["0 0"] * 63 + ["6 1"]
        board, turn = loads(" ".join(values))

        assert turn == Owner.PLAYER_TWO
        assert board.get((7, 7)) == Square(Rank.KING, Owner.PLAYER_ONE)

    @pytest.mark.parametrize("text", [
        "",
        "1 a b",
        "3 " + "0 0 " * 64,
        "1 " + "0 0 " * 10,
        "1 " + "7 1 " + "0 0 " * 63,
        "1 " + "0 3 " + "0 0 " * 63,
        "1 " + "1 0 " + "0 0 " * 63,
        "1 " + "0 2 " + "0 0 " * 63,
    ])
    def test_loads_invalid(self, text):
        """测试无效的存档内容"""
        with pytest.raises(PositionFormatError):
            loads(text, source="test.gst")


class TestPositionStore:
    """测试存档槽位"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.board = Board.standard()

    def test_slot_paths(self, tmp_path):
        """测试槽位对应的文件"""
        store = PositionStore(StorageConfig(save_dir=str(tmp_path)))

        assert store.slot_path(0) == tmp_path / "gamestate.gst"
        assert store.slot_path(2) == tmp_path / "scenario2.scn"

        with pytest.raises(ValueError):
            store.slot_path(4)

    def test_save_and_load(self, tmp_path):
        """测试保存和加载槽位"""
        store = PositionStore(StorageConfig(save_dir=str(tmp_path)))

        assert not store.exists(0)
        path = store.save(self.board, Owner.PLAYER_TWO, 0)

        assert path.exists()
        assert store.exists(0)

        board, turn = store.load(0)
        assert board == self.board
        assert turn == Owner.PLAYER_TWO

    def test_scenario_slot(self, tmp_path):
        """测试残局槽位与对局存档互不影响"""
        store = PositionStore(StorageConfig(save_dir=str(tmp_path)))
        scenario = Board()
        scenario.set((0, 4), Square(Rank.KING, Owner.PLAYER_ONE))

        store.save(self.board, Owner.PLAYER_ONE, 0)
        store.save(scenario, Owner.PLAYER_ONE, 3)

        assert store.load(3)[0] == scenario
        assert store.load(0)[0] == self.board

    def test_save_to_file_creates_directory(self, tmp_path):
        """测试保存到不存在的目录"""
        store = PositionStore()
        path = store.save_to_file(self.board, Owner.PLAYER_ONE, tmp_path / "saves" / "game.gst")

        assert path.exists()
        assert store.load_from_file(path)[0] == self.board

    def test_missing_file(self, tmp_path):
        """测试加载不存在的存档"""
        store = PositionStore(StorageConfig(save_dir=str(tmp_path)))

        with pytest.raises(FileNotFoundError):
            store.load(1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
