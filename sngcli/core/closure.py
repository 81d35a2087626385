"""组件依赖闭包收集

从请求组件目录下的全部文件出发，沿本地导入做广度优先遍历，
收集可达文件全集与遇到的外部包名。

遍历规则:
  - 工作队列 (FIFO) 初始为组件目录下全部非测试文件
  - visited_files / visited_folders 两个集合防止重复处理，
    visited_folders 初始即包含组件自身目录
  - 本地导入首次命中某个顶层目录时，整目录的文件全部入队（目录级展开）；
    该目录已访问过时只入队被解析到的单个文件
  - 同一文件可被多次入队，但只处理一次，因此遍历必然终止

输出文件按路径字典序排列，外部包名排序，同一源码树上重复调用结果一致。
"""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path

from sngcli.core.exceptions import SngUIError
from sngcli.core.imports import (
    extract_imports,
    external_package,
    is_excluded,
    is_local,
    resolve_local,
)
from sngcli.core.models import Closure

logger = logging.getLogger(__name__)


def list_unit_files(folder_path: str | Path) -> list[Path]:
    """递归列出目录下全部非测试/故事文件"""
    files: list[Path] = []
    for root, dirs, filenames in os.walk(folder_path):
        dirs.sort()
        for name in sorted(filenames):
            path = Path(root) / name
            if not is_excluded(path):
                files.append(path)
    return files


class ClosureCollector:
    """在源码根目录上计算组件闭包，调用之间不保留任何状态"""

    def __init__(self, source_root: str | Path) -> None:
        self.source_root = Path(source_root).resolve()

    def _top_folder(self, path: Path) -> str | None:
        parts = path.relative_to(self.source_root).parts
        # 直接位于根目录下的文件不属于任何组件目录
        return parts[0] if len(parts) > 1 else None

    def collect(self, unit_folder: str) -> Closure:
        """计算单个组件目录的依赖闭包"""
        unit_path = self.source_root / unit_folder
        if not unit_folder or not unit_path.is_dir():
            raise SngUIError(f"组件目录不存在: '{unit_folder}' (源码根目录 {self.source_root})")

        queue: deque[Path] = deque(list_unit_files(unit_path))
        visited_files: set[Path] = set()
        visited_folders: set[str] = {unit_folder}
        packages: set[str] = set()

        while queue:
            current = queue.popleft()
            if current in visited_files:
                continue
            visited_files.add(current)

            for specifier in extract_imports(current):
                if not is_local(specifier):
                    name = external_package(specifier)
                    if name is not None:
                        packages.add(name)
                    continue

                resolved = resolve_local(current, specifier, self.source_root)
                if resolved is None:
                    continue

                folder = self._top_folder(resolved)
                if folder is not None and folder not in visited_folders:
                    visited_folders.add(folder)
                    logger.debug("%s 引入目录 %s", unit_folder, folder)
                    queue.extend(list_unit_files(self.source_root / folder))
                else:
                    queue.append(resolved)

        files = tuple(sorted(visited_files, key=str))
        logger.info(
            "闭包 %s: %d 个文件, %d 个目录, %d 个外部包",
            unit_folder, len(files), len(visited_folders), len(packages),
        )
        return Closure(
            unit=unit_folder,
            files=files,
            external_packages=tuple(sorted(packages)),
        )
