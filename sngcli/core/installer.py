"""文件安装器

把闭包中的文件按相对源码根目录的路径镜像拷贝到目标目录。

策略:
  - 目标文件已存在且未指定 force → 跳过，绝不覆盖使用方的本地修改
  - planned 记录多个组件之间已计划写入的目标路径，已计划的路径与已存在同等
    对待；dry_run 不落盘时统计结果因此与真实安装一致
  - dry_run 只统计，不创建目录、不写任何文件
  - 单个文件读写失败立即中止整个安装；已拷贝的文件保留在磁盘上，不回滚
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from sngcli.core.exceptions import InstallError
from sngcli.core.models import InstallResult

logger = logging.getLogger(__name__)


def destination_for(source_file: Path, source_root: Path, destination_root: Path) -> Path:
    return destination_root / source_file.relative_to(source_root)


def install_files(
    files: Iterable[str | Path],
    destination_root: str | Path,
    *,
    source_root: str | Path,
    force: bool = False,
    dry_run: bool = False,
    planned: set[Path] | None = None,
) -> InstallResult:
    """拷贝文件到目标目录，返回拷贝 / 跳过数量

    planned 由调用方跨组件共享；本次处理的目标路径会加入其中。
    """
    src_root = Path(source_root).resolve()
    dst_root = Path(destination_root)
    if planned is None:
        planned = set()
    copied = 0
    skipped = 0

    for item in files:
        src = Path(item)
        dst = destination_for(src, src_root, dst_root)

        try:
            if not dry_run:
                dst.parent.mkdir(parents=True, exist_ok=True)

            if not force and (dst in planned or dst.exists()):
                logger.debug("已存在，跳过: %s", dst)
                skipped += 1
                continue
            planned.add(dst)

            if not dry_run:
                shutil.copyfile(src, dst)
                logger.debug("已拷贝: %s -> %s", src, dst)
        except OSError as e:
            raise InstallError(f"拷贝失败: {src} -> {dst} ({e})") from e
        copied += 1

    logger.info(
        "%s%s: 拷贝 %d, 跳过 %d",
        "[dry-run] " if dry_run else "", dst_root, copied, skipped,
    )
    return InstallResult(copied=copied, skipped=skipped)
