"""
异常定义

定义国际象棋规则引擎外层（对局会话、存档、配置、命令行）使用的异常类型。
走法合法性与将死判定本身以返回值表达，不通过异常传递。
"""


class ChessRulesError(Exception):
    """
    规则引擎基础异常

    所有规则引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidMoveError(ChessRulesError):
    """
    非法走法异常

    当调用方坚持执行一个被规则引擎拒绝的走法时抛出。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class InvalidCoordinateError(ChessRulesError, ValueError):
    """
    坐标异常

    坐标越界或记法（A1 - H8）无法解析时抛出。
    """

    def __init__(self, coordinate, reason: str = ""):
        message = f"无效的坐标: {coordinate!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_COORDINATE")
        self.coordinate = coordinate
        self.reason = reason


class GameStateError(ChessRulesError):
    """
    游戏状态异常

    当棋局状态不一致（例如找不到某一方的王）时抛出。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason


class PositionFormatError(ChessRulesError):
    """
    局面存档格式异常

    当存档文件内容缺失或数值越界时抛出。
    """

    def __init__(self, source: str, reason: str = ""):
        message = f"局面数据错误 - {source}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "POSITION_FORMAT_ERROR")
        self.source = source
        self.reason = reason


class ConfigurationError(ChessRulesError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason
