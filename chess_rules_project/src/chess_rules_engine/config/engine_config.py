"""
规则引擎配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass, field
from typing import Dict, List


# 升变可选的兵种名称
PROMOTION_CHOICES = ('rook', 'knight', 'bishop', 'queen')


@dataclass
class EngineConfig:
    """走法验证配置"""
    default_promotion: str = 'queen'    # 未指定升变时的默认兵种
    verbose_diagnostics: bool = True    # 对局模式下是否记录非法走法原因


@dataclass
class ScenarioConfig:
    """残局编辑器配置"""
    # 每一方各兵种的数量上限
    piece_limits: Dict[str, int] = field(default_factory=lambda: {
        'pawn': 8,
        'rook': 2,
        'knight': 2,
        'bishop': 2,
        'queen': 1,
        'king': 1,
    })
    min_pieces: int = 3                 # 棋盘上至少的棋子总数（两个王之外至少一子）


@dataclass
class StorageConfig:
    """局面存档配置"""
    save_dir: str = '.'                 # 存档目录
    gamestate_file: str = 'gamestate.gst'   # 对局存档（槽位0）
    scenario_files: List[str] = field(default_factory=lambda: [
        'scenario1.scn',
        'scenario2.scn',
        'scenario3.scn',
    ])


@dataclass
class SystemConfig:
    """系统配置"""
    log_level: str = 'INFO'             # 日志级别
    log_file: str = ''                  # 日志文件，为空时只输出到控制台
    log_dir: str = 'logs'               # 日志目录
    log_max_size: int = 10              # 日志文件最大大小(MB)
    log_backup_count: int = 5           # 日志备份数量


# 默认配置实例
DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_SCENARIO_CONFIG = ScenarioConfig()
DEFAULT_STORAGE_CONFIG = StorageConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
