"""
配置管理器

负责加载、保存和管理各种配置。
"""

import copy
import json
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Dict, Any, Type, TypeVar

import yaml

from .engine_config import (
    EngineConfig, ScenarioConfig, StorageConfig, SystemConfig, PROMOTION_CHOICES,
    DEFAULT_ENGINE_CONFIG, DEFAULT_SCENARIO_CONFIG, DEFAULT_STORAGE_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    配置管理器

    负责加载、保存和管理规则引擎的各种配置。
    """

    def __init__(self, config_dir: str = "chess_rules_project/configs/chess_rules_engine"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'engine': self.config_dir / 'engine_config.yaml',
            'scenario': self.config_dir / 'scenario_config.yaml',
            'storage': self.config_dir / 'storage_config.yaml',
            'system': self.config_dir / 'system_config.yaml',
        }

        self.default_configs = {
            'engine': DEFAULT_ENGINE_CONFIG,
            'scenario': DEFAULT_SCENARIO_CONFIG,
            'storage': DEFAULT_STORAGE_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG,
        }

        self.config_types = {
            'engine': EngineConfig,
            'scenario': ScenarioConfig,
            'storage': StorageConfig,
            'system': SystemConfig,
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def _default(self, config_name: str):
        # 默认实例可能包含可变字段，返回副本
        return copy.deepcopy(self.default_configs[config_name])

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file or not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return self._default(config_name)

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix == '.yaml':
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)

            config = self._dict_to_dataclass(data or {}, config_class)
            logger.debug(f"成功加载配置: {config_file}")
            return config

        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return self._default(config_name)

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        data = asdict(config_obj)

        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                if config_file.suffix == '.yaml':
                    yaml.dump(data, f, default_flow_style=False,
                              allow_unicode=True, indent=2)
                else:
                    json.dump(data, f, ensure_ascii=False, indent=2)

            logger.debug(f"成功保存配置: {config_file}")

        except OSError as e:
            logger.error(f"保存配置文件失败: {config_file}, 错误: {e}")
            raise

    def get_engine_config(self) -> EngineConfig:
        """获取走法验证配置"""
        return self.load_config('engine', EngineConfig)

    def get_scenario_config(self) -> ScenarioConfig:
        """获取残局编辑器配置"""
        return self.load_config('scenario', ScenarioConfig)

    def get_storage_config(self) -> StorageConfig:
        """获取存档配置"""
        return self.load_config('storage', StorageConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        if config_name not in self.config_types:
            raise ConfigurationError(config_name, "未知的配置名称")

        config_class = self.config_types[config_name]
        config = self.load_config(config_name, config_class)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """
        重置配置为默认值

        Args:
            config_name: 配置名称
        """
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])

        if config_name == 'engine':
            return config.default_promotion in PROMOTION_CHOICES
        elif config_name == 'scenario':
            return (all(isinstance(v, int) and v > 0 for v in config.piece_limits.values()) and
                    config.piece_limits.get('king') == 1 and
                    config.min_pieces >= 2)
        elif config_name == 'storage':
            return bool(config.gamestate_file) and len(config.scenario_files) == 3
        elif config_name == 'system':
            return config.log_level.upper() in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """
        获取所有配置

        Returns:
            Dict[str, Any]: 所有配置的字典
        """
        return {
            config_name: self.load_config(config_name, config_class)
            for config_name, config_class in self.config_types.items()
        }

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件

        Args:
            export_path: 导出文件路径
        """
        export_data = {
            config_name: asdict(config_obj)
            for config_name, config_obj in self.get_all_configs().items()
        }

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix == '.yaml':
                yaml.dump(export_data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """
        将字典转换为数据类对象，忽略未知字段

        Args:
            data: 字典数据
            dataclass_type: 数据类类型

        Returns:
            数据类对象
        """
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
