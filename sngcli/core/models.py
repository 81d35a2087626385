"""核心数据模型

闭包、单次安装结果和批量安装报告集中定义在此处，
各模块统一从这里导入，避免 orchestrator ↔ installer 的循环依赖。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Closure:
    """单个组件的依赖闭包

    files 按路径字典序排列，external_packages 按名称排序，均已去重。
    """

    unit: str
    files: tuple[Path, ...] = ()
    external_packages: tuple[str, ...] = ()


@dataclass(frozen=True)
class InstallResult:
    """一次 install_files 调用的统计"""

    copied: int = 0
    skipped: int = 0


@dataclass
class UnitReport:
    """单个请求组件的安装结果"""

    name: str
    folder: str
    copied: int = 0
    skipped: int = 0
    external_packages: list[str] = field(default_factory=list)


@dataclass
class InstallReport:
    """批量安装汇总报告"""

    destination: Path
    dry_run: bool = False
    units: list[UnitReport] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    available: list[str] = field(default_factory=list)
    external_packages: list[str] = field(default_factory=list)

    @property
    def total_copied(self) -> int:
        return sum(u.copied for u in self.units)

    @property
    def total_skipped(self) -> int:
        return sum(u.skipped for u in self.units)

    @property
    def success(self) -> bool:
        return not self.missing

    def install_hint(self) -> str:
        """可直接粘贴给包管理器的安装命令，没有外部依赖时为空串"""
        if not self.external_packages:
            return ""
        return "npm install " + " ".join(self.external_packages)
