"""
配置管理测试

测试配置文件的创建、加载、更新、验证和导出。
"""

from dataclasses import asdict
from pathlib import Path

import yaml
import pytest

from chess_rules_project.src.chess_rules_engine.config import (
    ConfigManager, EngineConfig, ScenarioConfig, StorageConfig, SystemConfig
)
from chess_rules_project.src.chess_rules_engine.utils import ConfigurationError


class TestConfigManager:
    """ConfigManager类的测试"""

    @pytest.fixture
    def manager(self, tmp_path):
        return ConfigManager(str(tmp_path / "configs"))

    def test_default_files_created(self, manager):
        """测试创建默认配置文件"""
        for config_file in manager.config_files.values():
            assert config_file.exists()

        with open(manager.config_files['engine'], 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        assert data == {'default_promotion': 'queen', 'verbose_diagnostics': True}

    def test_get_configs(self, manager):
        """测试获取各项配置"""
        assert manager.get_engine_config() == EngineConfig()
        assert manager.get_scenario_config() == ScenarioConfig()
        assert manager.get_storage_config() == StorageConfig()
        assert manager.get_system_config() == SystemConfig()

        configs = manager.get_all_configs()
        assert set(configs) == {'engine', 'scenario', 'storage', 'system'}

    def test_update_config(self, manager):
        """测试更新配置"""
        manager.update_config('engine', default_promotion='knight', unknown_key=1)

        config = manager.get_engine_config()
        assert config.default_promotion == 'knight'
        assert not hasattr(config, 'unknown_key')

        with pytest.raises(ConfigurationError):
            manager.update_config('renderer', width=10)

    def test_validate_and_reset(self, manager):
        """测试验证和重置配置"""
        assert all(manager.validate_config(name) for name in manager.config_types)

        manager.update_config('engine', default_promotion='king')
        assert not manager.validate_config('engine')

        manager.update_config('scenario', min_pieces=1)
        assert not manager.validate_config('scenario')

        manager.reset_config('engine')
        assert manager.validate_config('engine')
        assert manager.get_engine_config().default_promotion == 'queen'

    def test_corrupted_file_falls_back(self, manager):
        """测试配置文件损坏时使用默认配置"""
        manager.config_files['storage'].write_text("save_dir: [unclosed", encoding='utf-8')

        config = manager.get_storage_config()
        assert config == StorageConfig()

        # 返回的默认配置是副本
        config.scenario_files.append('scenario4.scn')
        assert len(manager.get_storage_config().scenario_files) == 3

    def test_unknown_fields_ignored(self, manager):
        """测试忽略未知的配置项"""
        manager.config_files['system'].write_text(
            "log_level: DEBUG\nlegacy_option: 1\n", encoding='utf-8'
        )

        config = manager.get_system_config()
        assert config.log_level == 'DEBUG'
        assert config.log_dir == SystemConfig().log_dir

    def test_export_configs(self, manager, tmp_path):
        """测试导出配置"""
        export_path = tmp_path / "all_configs.yaml"
        manager.export_configs(str(export_path))

        with open(export_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        assert data['scenario']['piece_limits']['queen'] == 1
        assert data['storage']['gamestate_file'] == 'gamestate.gst'


class TestDefaultConfigFile:
    """configs/default.yaml 的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        config_path = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"
        with open(config_path, 'r', encoding='utf-8') as f:
            self.data = yaml.safe_load(f)

    def test_sections(self):
        """测试包含每一项配置"""
        assert set(self.data) == {'engine', 'scenario', 'storage', 'system'}

    @pytest.mark.parametrize("section, config_class", [
        ('engine', EngineConfig),
        ('scenario', ScenarioConfig),
        ('storage', StorageConfig),
        ('system', SystemConfig),
    ])
    def test_matches_dataclass_defaults(self, section, config_class):
        """测试文档化的默认值与配置类的默认值一致"""
        assert self.data[section] == asdict(config_class())

    def test_loadable_by_config_manager(self, tmp_path):
        """测试每一节都能被ConfigManager加载"""
        manager = ConfigManager(str(tmp_path / "configs"))
        for section, values in self.data.items():
            with open(manager.config_files[section], 'w', encoding='utf-8') as f:
                yaml.safe_dump(values, f)

        assert manager.get_engine_config() == EngineConfig()
        assert manager.get_scenario_config() == ScenarioConfig()
        assert manager.get_storage_config() == StorageConfig()
        assert manager.get_system_config() == SystemConfig()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
