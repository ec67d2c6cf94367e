"""
日志系统

规则引擎的各组件通过 LoggerMixin 获得 chess_rules.<类名> 日志记录器，
对局模式的非法走法原因、将死判定失败和耗时都输出到这里。
"""

import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional

ROOT_LOGGER_NAME = 'chess_rules'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/chess_rules_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True,
    force: bool = False
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件名，None表示不写文件
        log_dir: 日志目录
        max_size: 日志文件最大大小(MB)
        backup_count: 备份文件数量
        console_output: 是否输出到控制台
        force: 已配置过时是否替换原有的处理器

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        if not force:
            return logger
        _remove_handlers(logger)

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # 调试级别时附带源码位置
    formatter = logging.Formatter(
        fmt=DEBUG_LOG_FORMAT if log_level <= logging.DEBUG else LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_logger_from_config(system_config, debug: bool = False) -> logging.Logger:
    """
    按系统配置设置规则引擎的根日志记录器

    每次调用都会替换原有的处理器，命令行的每次调用都重新绑定当前的标准输出。

    Args:
        system_config: SystemConfig 对象
        debug: 是否强制使用DEBUG级别

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    return setup_logger(
        name=ROOT_LOGGER_NAME,
        level='DEBUG' if debug else system_config.log_level,
        log_file=system_config.log_file or None,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        force=True
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    获取日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        logging.Logger: 日志记录器
    """
    return logging.getLogger(name)


class LoggerMixin:
    """
    日志记录器混入类

    日志记录器名称为 chess_rules.<类名>，随根记录器的配置输出。
    """

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{self.__class__.__name__}')

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)


class PerformanceLogger:
    """
    性能日志记录器

    记录将死判定等操作的耗时，并保留每个操作最近一次的耗时。
    """

    def __init__(self, name: str = 'performance'):
        self.logger = get_logger(f'{ROOT_LOGGER_NAME}.{name}')
        self.start_times: Dict[str, datetime] = {}
        self.last_elapsed: Dict[str, float] = {}

    def start_timer(self, operation: str):
        self.start_times[operation] = datetime.now()

    def end_timer(self, operation: str) -> float:
        """结束计时并返回耗时(秒)"""
        if operation not in self.start_times:
            self.logger.warning(f"未找到计时器: {operation}")
            return 0.0

        return self._record(operation, self.start_times.pop(operation))

    def _record(self, operation: str, started: datetime) -> float:
        elapsed = (datetime.now() - started).total_seconds()
        self.last_elapsed[operation] = elapsed

        self.logger.debug(f"操作完成: {operation}, 耗时: {elapsed:.4f}秒")
        return elapsed

    @contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        """
        计时上下文，退出时（包括异常退出）记录耗时

        开始时间保存在上下文内，同名操作可以嵌套或并发计时。

        Args:
            operation: 操作名称
        """
        started = datetime.now()
        try:
            yield
        finally:
            self._record(operation, started)


# 全局性能日志记录器实例
performance_logger = PerformanceLogger()
