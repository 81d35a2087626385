"""CLI — 查询组件目录与依赖闭包"""

from __future__ import annotations

from pathlib import Path

import click

from sngcli.cli import handle_errors, source_root
from sngcli.core.catalog import build_catalog
from sngcli.core.config import read_config
from sngcli.core.orchestrator import resolve_many


def register(group: click.Group) -> None:
    group.add_command(list_components)
    group.add_command(show)


def _source(ctx: click.Context) -> str:
    return source_root(ctx) or read_config(Path.cwd()).source_root


@click.command(name="list")
@click.pass_context
@handle_errors
def list_components(ctx: click.Context) -> None:
    """列出所有可安装组件"""
    names = build_catalog(_source(ctx)).list_installable()
    if not names:
        click.echo("没有可安装的组件。")
        return
    for name in names:
        click.echo(f"  {name}")


@click.command()
@click.argument("components", nargs=-1, required=True)
@click.pass_context
@handle_errors
def show(ctx: click.Context, components: tuple[str, ...]) -> None:
    """显示组件的依赖闭包（不拷贝任何文件）"""
    root = _source(ctx)
    for closure in resolve_many(components, source_root=root):
        click.echo(f"{closure.unit}:")
        for f in closure.files:
            click.echo(f"  {f.relative_to(Path(root).resolve()).as_posix()}")
        if closure.external_packages:
            click.echo(f"  外部包: {' '.join(closure.external_packages)}")
