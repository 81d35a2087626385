"""组件目录

扫描源码根目录下的一级子目录，每个子目录即一个可安装单元。
名称表同时登记目录原名和去掉 "sng-" 前缀后的短别名。

注意:
  - 扫描顺序即目录列举顺序（不排序）。两个目录去前缀后别名相同时，
    后登记者生效，具体指向取决于文件系统，属于已知的不确定性。
  - 每次调用都重新扫描，不做任何缓存。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sngcli.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

RESERVED_FOLDER = "styles"
UNIT_PREFIX = "sng-"
INTERNAL_SUFFIX = "-core"


def strip_prefix(folder: str) -> str:
    return folder[len(UNIT_PREFIX):] if folder.startswith(UNIT_PREFIX) else folder


class ComponentCatalog:
    """组件名 → 目录名 查找表"""

    def __init__(self, source_root: Path, folders: list[str]) -> None:
        self.source_root = source_root
        self.folders = list(folders)
        self._names: dict[str, str] = {}
        for folder in self.folders:
            self._names[folder] = folder
            if folder.startswith(UNIT_PREFIX):
                alias = strip_prefix(folder)
                previous = self._names.get(alias)
                if previous is not None and previous != folder:
                    logger.debug("别名 %s 由 %s 改指向 %s", alias, previous, folder)
                self._names[alias] = folder

    def resolve(self, name: str) -> str | None:
        """按名称（原名或别名）查找目录，不存在返回 None"""
        return self._names.get(name)

    def resolve_installable(self, name: str) -> str | None:
        """按名称查找可直接安装的目录

        指向 -core 内部单元的名称视为未知；带前缀的原名仍可使用。
        """
        folder = self._names.get(name)
        if folder is None or folder.endswith(INTERNAL_SUFFIX):
            return None
        return folder

    def list_installable(self) -> list[str]:
        """可直接安装的组件名（排序）

        带前缀的原名和 -core 结尾的内部单元不直接暴露，
        它们只会作为其他组件的依赖被间接拉入。
        """
        return sorted({
            name for name in self._names
            if not name.startswith(UNIT_PREFIX) and not name.endswith(INTERNAL_SUFFIX)
        })

    def __contains__(self, name: object) -> bool:
        return name in self._names


def build_catalog(source_root: str | Path) -> ComponentCatalog:
    """扫描源码根目录，构建组件目录"""
    root = Path(source_root).resolve()
    if not root.is_dir():
        raise ConfigError(f"组件源码目录不存在: {root}")

    with os.scandir(root) as entries:
        folders = [
            e.name for e in entries
            if e.is_dir() and e.name != RESERVED_FOLDER
        ]

    logger.debug("扫描到 %d 个组件目录: %s", len(folders), root)
    return ComponentCatalog(root, folders)
