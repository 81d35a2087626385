"""sng-ui 命令行接口

CLI 按命令拆分为子模块，每个模块注册自己的命令到 main group。
业务异常统一转换为 click.ClickException：错误信息输出到 stderr，退出码为 1。
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from sngcli import __version__
from sngcli.core.exceptions import SngUIError
from sngcli.utils.logger import setup_logging_from_env


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """把 SngUIError 转为 click 可识别的失败"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SngUIError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def source_root(ctx: click.Context) -> str:
    """当前命令使用的组件源码根目录（--source 优先，其次配置）"""
    return (ctx.obj or {}).get("source") or ""


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--source", default=None, type=click.Path(file_okay=False),
    help="组件库源码根目录（默认读取 SNGUI_SOURCE_ROOT 或包内 src/lib）",
)
@click.pass_context
def main(ctx: click.Context, source: str | None) -> None:
    """sng-ui - 按需把组件源码拷贝到你的项目中"""
    setup_logging_from_env()
    ctx.ensure_object(dict)
    ctx.obj["source"] = str(Path(source).resolve()) if source else ""


# 注册各子命令
from sngcli.cli.cmd_init import register as _reg_init  # noqa: E402
from sngcli.cli.cmd_add import register as _reg_add  # noqa: E402
from sngcli.cli.cmd_list import register as _reg_list  # noqa: E402

_reg_init(main)
_reg_add(main)
_reg_list(main)
