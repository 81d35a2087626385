"""CLI — 安装组件"""

from __future__ import annotations

from pathlib import Path

import click

from sngcli.cli import handle_errors, source_root
from sngcli.core.catalog import build_catalog
from sngcli.core.config import read_config
from sngcli.core.exceptions import UnknownComponentError
from sngcli.core.models import InstallReport
from sngcli.core.orchestrator import install_many


def register(group: click.Group) -> None:
    group.add_command(add)


def _echo_units(report: InstallReport) -> None:
    for unit in report.units:
        click.echo(f"已添加 {unit.name}: {unit.copied} 个文件, 跳过 {unit.skipped}。")


@click.command()
@click.argument("components", nargs=-1)
@click.option("--all", "install_all", is_flag=True, help="安装全部可安装组件")
@click.option("--path", "components_dir", default=None, help="组件安装目录（覆盖配置文件）")
@click.option("--force", is_flag=True, help="覆盖已存在的文件")
@click.option("--dry-run", is_flag=True, help="只统计，不写入任何文件")
@click.pass_context
@handle_errors
def add(
    ctx: click.Context, components: tuple[str, ...], install_all: bool,
    components_dir: str | None, force: bool, dry_run: bool,
) -> None:
    """安装组件及其本地依赖，例如: sng-ui add button table"""
    cwd = Path.cwd()
    config = read_config(cwd)
    destination = (cwd / (components_dir or config.components_dir)).resolve()

    root = source_root(ctx) or config.source_root
    if install_all and not components:
        count = len(build_catalog(root).list_installable())
        click.echo(f"正在安装全部组件 ({count})...")

    try:
        report = install_many(
            components, destination,
            source_root=root,
            force=force, dry_run=dry_run, install_all=install_all,
        )
    except UnknownComponentError as e:
        if e.report is not None:
            _echo_units(e.report)
        raise

    _echo_units(report)
    prefix = "[dry-run] " if dry_run else ""
    click.echo(
        f"{prefix}完成。共拷贝 {report.total_copied} 个文件, 跳过 {report.total_skipped}。"
    )
    if report.external_packages:
        click.echo(f"如缺少以下依赖请安装:\n  {report.install_hint()}")
