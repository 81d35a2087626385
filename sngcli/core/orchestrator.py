"""安装编排

串联 组件目录 → 闭包收集 → 文件安装 三步，并汇总多组件结果。

规则:
  - 请求名称先去重（保留首次出现顺序），重复请求没有额外效果
  - 未知名称不立即失败：先处理完所有可解析的组件，最后统一抛出
    UnknownComponentError，列出全部未知名称和可安装组件
  - 参数错误在任何文件系统改动之前检查
  - 外部包取所有请求组件闭包的并集
  - 多个组件共用的文件只在首次出现时计入拷贝，之后计为跳过（dry-run 同样如此）

用法:
    from sngcli.core.orchestrator import install_many

    report = install_many(["button", "table"], "src/lib/sng-ui", source_root="lib/src/lib")
    print(report.total_copied, report.install_hint())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from sngcli.core.catalog import ComponentCatalog, build_catalog
from sngcli.core.closure import ClosureCollector
from sngcli.core.exceptions import ConfigError, UnknownComponentError
from sngcli.core.installer import install_files
from sngcli.core.models import Closure, InstallReport, UnitReport

logger = logging.getLogger(__name__)


def _requested_names(
    names: Iterable[str], catalog: ComponentCatalog, install_all: bool,
) -> list[str]:
    requested = [n for n in names if n]
    if install_all and requested:
        raise ConfigError("--all 不能与组件名同时使用")
    if install_all:
        return catalog.list_installable()
    if not requested:
        raise ConfigError("缺少组件名。示例: sng-ui add button")
    return list(dict.fromkeys(requested))


def resolve_many(
    names: Iterable[str],
    *,
    source_root: str | Path,
    install_all: bool = False,
) -> list[Closure]:
    """只计算闭包不安装；存在未知名称时抛出 UnknownComponentError"""
    catalog = build_catalog(source_root)
    requested = _requested_names(names, catalog, install_all)
    collector = ClosureCollector(catalog.source_root)

    closures: list[Closure] = []
    missing: list[str] = []
    for name in requested:
        folder = catalog.resolve_installable(name)
        if folder is None:
            missing.append(name)
            continue
        closures.append(collector.collect(folder))

    if missing:
        raise UnknownComponentError(missing, catalog.list_installable())
    return closures


def install_many(
    names: Iterable[str],
    destination_root: str | Path,
    *,
    source_root: str | Path,
    force: bool = False,
    dry_run: bool = False,
    install_all: bool = False,
) -> InstallReport:
    """安装一个或多个组件（或全部可安装组件）"""
    catalog = build_catalog(source_root)
    requested = _requested_names(names, catalog, install_all)
    collector = ClosureCollector(catalog.source_root)

    report = InstallReport(
        destination=Path(destination_root),
        dry_run=dry_run,
        available=catalog.list_installable(),
    )
    packages: set[str] = set()
    # 跨组件共享：共用文件只在第一个组件中计入拷贝
    planned: set[Path] = set()

    if install_all:
        logger.info("安装全部组件 (%d)", len(requested))

    for name in requested:
        folder = catalog.resolve_installable(name)
        if folder is None:
            logger.warning("未知组件: %s", name)
            report.missing.append(name)
            continue

        closure = collector.collect(folder)
        result = install_files(
            closure.files, destination_root,
            source_root=catalog.source_root, force=force, dry_run=dry_run,
            planned=planned,
        )
        report.units.append(UnitReport(
            name=name,
            folder=folder,
            copied=result.copied,
            skipped=result.skipped,
            external_packages=list(closure.external_packages),
        ))
        packages.update(closure.external_packages)

    report.external_packages = sorted(packages)

    if report.missing:
        raise UnknownComponentError(report.missing, report.available, report=report)

    logger.info(
        "安装完成: 拷贝 %d, 跳过 %d, 外部包 %d",
        report.total_copied, report.total_skipped, len(report.external_packages),
    )
    return report
