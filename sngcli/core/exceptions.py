"""统一异常体系

所有业务异常继承 SngUIError，替代散落的 ValueError / RuntimeError。
CLI 层据此输出友好提示并返回非零退出码。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sngcli.core.models import InstallReport


class SngUIError(Exception):
    """安装器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(SngUIError):
    """配置文件无效，或命令参数缺失 / 冲突"""

    code = "CONFIG_ERROR"


class UnknownComponentError(SngUIError):
    """请求的组件名在目录中不存在

    会汇总全部未知名称，并附带完整的可安装组件列表，便于调用方自行纠正。
    若在批量安装之后抛出，report 中保留已处理组件的统计。
    """

    code = "UNKNOWN_COMPONENT"

    def __init__(
        self,
        missing: list[str],
        available: list[str],
        report: InstallReport | None = None,
    ) -> None:
        super().__init__(
            f"未知组件: {', '.join(missing)}。\n"
            f"可用组件: {', '.join(available)}"
        )
        self.missing = list(missing)
        self.available = list(available)
        self.report = report


class InstallError(SngUIError):
    """拷贝文件时的读写失败"""

    code = "INSTALL_ERROR"
