"""
配置管理模块

包含走法验证、残局编辑、存档和系统配置。
"""

from .config_manager import ConfigManager
from .engine_config import EngineConfig, ScenarioConfig, StorageConfig, SystemConfig, PROMOTION_CHOICES

__all__ = [
    'ConfigManager', 'EngineConfig', 'ScenarioConfig', 'StorageConfig', 'SystemConfig',
    'PROMOTION_CHOICES'
]
