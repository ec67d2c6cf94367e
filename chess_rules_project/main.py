#!/usr/bin/env python3
"""
Chess Rules 主入口文件

提供命令行接口：创建、查看、走子、分析和验证保存的局面。
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chess_rules_project import __version__, __description__
from chess_rules_project.src.chess_rules_engine.config import ConfigManager
from chess_rules_project.src.chess_rules_engine.game_interface import GameSession, GameState, PositionStore
from chess_rules_project.src.chess_rules_engine.rules_engine import (
    Board, BoardValidator, Coordinate, MateStatus, Owner, Rank, RuleEngine
)
from chess_rules_project.src.chess_rules_engine.utils import ChessRulesError, setup_logger_from_config

console = Console()

PLAYER_LABELS = {Owner.PLAYER_ONE: "一号玩家", Owner.PLAYER_TWO: "二号玩家"}
MATE_LABELS = {
    MateStatus.NOT_MATE: "未将死",
    MateStatus.MATE: "将死",
    MateStatus.INDETERMINATE: "无法判定",
}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♚ Chess Rules ♔\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="国际象棋规则引擎",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


def print_board(board: Board, turn: Optional[Owner] = None):
    """打印棋盘"""
    title = f"轮到 {PLAYER_LABELS[turn]}" if turn is not None else "棋盘"
    console.print(Panel(board.to_visual_string(), title=title, border_style="cyan", expand=False))


def _store(ctx: click.Context) -> PositionStore:
    return ctx.obj['store']


def _load(ctx: click.Context, slot: int, file: Optional[str]):
    """按 --file 或 --slot 加载局面"""
    store = _store(ctx)
    try:
        if file:
            return store.load_from_file(file)
        return store.load(slot)
    except (OSError, ChessRulesError) as e:
        raise click.ClickException(f"加载局面失败: {e}")


def _save(ctx: click.Context, board: Board, turn: Owner, slot: int, file: Optional[str]) -> Path:
    store = _store(ctx)
    try:
        if file:
            return store.save_to_file(board, turn, file)
        return store.save(board, turn, slot)
    except OSError as e:
        raise click.ClickException(f"保存局面失败: {e}")


def position_options(func):
    """--slot 和 --file 选项"""
    func = click.option('--file', 'file', type=click.Path(dir_okay=False),
                        help='局面文件路径（优先于槽位）')(func)
    func = click.option('--slot', type=click.IntRange(0, 3), default=0,
                        help='存档槽位: 0为对局存档, 1-3为残局')(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="Chess Rules")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config-dir', type=click.Path(file_okay=False),
              default='chess_rules_project/configs/chess_rules_engine', help='配置文件目录')
@click.option('--save-dir', type=click.Path(file_okay=False), help='存档目录（覆盖配置）')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_dir: str, save_dir: Optional[str]):
    """国际象棋规则引擎 - 走法验证、将军检测与将死判定"""
    config_manager = ConfigManager(config_dir)
    system_config = config_manager.get_system_config()
    storage_config = config_manager.get_storage_config()
    if save_dir:
        storage_config.save_dir = save_dir

    setup_logger_from_config(system_config, debug)

    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")

    ctx.ensure_object(dict)
    ctx.obj['config_manager'] = config_manager
    ctx.obj['engine_config'] = config_manager.get_engine_config()
    ctx.obj['scenario_config'] = config_manager.get_scenario_config()
    ctx.obj['store'] = PositionStore(storage_config)


@cli.command()
@position_options
@click.option('--empty', is_flag=True, help='创建空棋盘而不是标准开局')
@click.pass_context
def new(ctx: click.Context, slot: int, file: Optional[str], empty: bool):
    """创建新局面并保存"""
    board = Board() if empty else Board.standard()
    path = _save(ctx, board, Owner.PLAYER_ONE, slot, file)
    console.print(f"[green]新局面已保存: {path}[/green]")
    print_board(board, Owner.PLAYER_ONE)


@cli.command()
@position_options
@click.pass_context
def show(ctx: click.Context, slot: int, file: Optional[str]):
    """显示保存的局面"""
    board, turn = _load(ctx, slot, file)
    print_board(board, turn)


@cli.command()
@click.argument('from_square')
@click.argument('to_square')
@position_options
@click.option('--promote', type=click.Choice(['rook', 'knight', 'bishop', 'queen']),
              help='兵到达底线时的升变兵种')
@click.pass_context
def move(ctx: click.Context, from_square: str, to_square: str, slot: int,
         file: Optional[str], promote: Optional[str]):
    """为轮到的一方走一步（如: move E2 E4）"""
    try:
        from_pos = Coordinate.from_notation(from_square)
        to_pos = Coordinate.from_notation(to_square)
    except ChessRulesError as e:
        raise click.BadParameter(str(e))

    board, turn = _load(ctx, slot, file)

    promotion_provider = None
    if promote:
        promotion_provider = lambda _board, _move: Rank.from_name(promote)

    engine = RuleEngine(promotion_provider, ctx.obj['engine_config'])
    session = GameSession(board, turn, engine=engine)

    try:
        session.start_turn()
    except ChessRulesError as e:
        raise click.ClickException(str(e))

    if session.state is GameState.CHECKMATE:
        console.print(f"[red]{PLAYER_LABELS[turn]}已被将死，{PLAYER_LABELS[session.winner]}获胜[/red]")
        return

    result = session.try_move(from_pos, to_pos)
    if not result.ok:
        console.print(f"[red]非法走法 {from_square.upper()}-{to_square.upper()}: {result.message}[/red]")
        ctx.exit(1)

    if result.promoted_to is not None:
        console.print(f"[green]兵升变为 {result.promoted_to.name.lower()}[/green]")

    _save(ctx, session.board, session.player_to_move, slot, file)
    print_board(session.board, session.player_to_move)

    try:
        status = session.start_turn()
    except ChessRulesError as e:
        raise click.ClickException(str(e))

    if session.state is GameState.CHECKMATE:
        console.print(f"[bold red]将死！{PLAYER_LABELS[session.winner]}获胜[/bold red]")
    elif status.in_check:
        console.print(f"[yellow]{PLAYER_LABELS[status.player]}被将军[/yellow]")


@cli.command()
@position_options
@click.pass_context
def analyze(ctx: click.Context, slot: int, file: Optional[str]):
    """分析双方的将军和将死状态"""
    board, turn = _load(ctx, slot, file)
    print_board(board, turn)

    engine = RuleEngine(config=ctx.obj['engine_config'])

    table = Table(title="局面分析")
    table.add_column("玩家", style="cyan")
    table.add_column("王", style="white")
    table.add_column("被将军", style="yellow")
    table.add_column("攻击者", style="magenta")
    table.add_column("将死", style="red")

    for player in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
        status = engine.game_status(board, player)
        king = status['king'].to_notation() if status['king'] is not None else "-"
        if status['double_check']:
            in_check = "双将"
        else:
            in_check = "是" if status['in_check'] else "否"
        attackers = ", ".join(coord.to_notation() for coord in status['attackers']) or "-"
        table.add_row(PLAYER_LABELS[player], king, in_check, attackers,
                      MATE_LABELS[status['mate_status']])

    console.print(table)


@cli.command()
@position_options
@click.pass_context
def validate(ctx: click.Context, slot: int, file: Optional[str]):
    """验证残局能否开始对局"""
    board, _ = _load(ctx, slot, file)
    validator = BoardValidator(RuleEngine(config=ctx.obj['engine_config']), ctx.obj['scenario_config'])
    is_valid, errors = validator.full_validation(board)

    if is_valid:
        console.print("[green]局面验证通过[/green]")
        return

    error_text = Text()
    for error in errors:
        error_text.append(f"• {error}\n", style="red")
    console.print(Panel(error_text, title="局面验证失败", border_style="red"))
    ctx.exit(1)


@cli.command()
def info():
    """显示系统信息"""
    print_banner()

    status_text = Text()
    status_text.append("📊 功能\n", style="bold yellow")
    status_text.append("• 走法验证: 兵、车、马、象、后、王\n", style="white")
    status_text.append("• 将军检测: 单将与双将\n", style="white")
    status_text.append("• 将死判定: 移动王、吃掉攻击者、垫子\n", style="white")
    status_text.append("• 不包含: 王车易位、吃过路兵、和棋规则\n", style="white")

    console.print(Panel(status_text, title="系统状态", border_style="yellow"))


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
