"""CLI — 初始化使用方配置"""

from __future__ import annotations

from pathlib import Path

import click

from sngcli.cli import handle_errors
from sngcli.core.config import CONFIG_FILE, DEFAULT_COMPONENTS_DIR, write_config


def register(group: click.Group) -> None:
    group.add_command(init)


@click.command()
@click.option("--path", "components_dir", default=DEFAULT_COMPONENTS_DIR, show_default=True,
              help="组件安装目录")
@click.option("--force", is_flag=True, help="覆盖已存在的配置文件")
@handle_errors
def init(components_dir: str, force: bool) -> None:
    """在当前目录生成 sng-ui.yml"""
    write_config(Path.cwd(), components_dir, force=force)
    click.echo(f'已创建 {CONFIG_FILE}，components_dir="{components_dir}"。')
