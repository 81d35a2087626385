"""集中配置管理

使用方项目根目录下的 sng-ui.yml 记录组件安装目录，供后续 add 命令复用。
文件不存在时使用默认值，从不要求其存在。

组件库源码根目录默认是本包旁边的 src/lib，可用环境变量 SNGUI_SOURCE_ROOT
或 CLI 的 --source 覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sngcli.core.exceptions import ConfigError
from sngcli.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)

CONFIG_FILE = "sng-ui.yml"
DEFAULT_COMPONENTS_DIR = "src/lib/sng-ui"
SOURCE_ROOT_ENV = "SNGUI_SOURCE_ROOT"

PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def default_source_root() -> str:
    """组件库源码根目录（环境变量优先）"""
    return os.environ.get(SOURCE_ROOT_ENV) or str(PACKAGE_ROOT / "src" / "lib")


@dataclass
class Config:
    """安装器配置"""

    components_dir: str = DEFAULT_COMPONENTS_DIR
    source_root: str = field(default_factory=default_source_root)

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        components_dir 不是非空字符串时回退到默认目录。
        """
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path} ({e})") from e
        if not data:
            return cls()

        cfg = cls()
        components_dir = data.get("components_dir")
        if isinstance(components_dir, str) and components_dir.strip():
            cfg.components_dir = components_dir
        elif components_dir is not None:
            logger.warning("components_dir 无效，使用默认值: %s", DEFAULT_COMPONENTS_DIR)

        source_root = data.get("source_root")
        if isinstance(source_root, str) and source_root.strip():
            cfg.source_root = source_root

        known = {"components_dir", "source_root"}
        cfg.extra = {k: v for k, v in data.items() if k not in known}
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def read_config(cwd: str | Path) -> Config:
    """读取 cwd 下的 sng-ui.yml"""
    return Config.from_file(Path(cwd) / CONFIG_FILE)


def write_config(cwd: str | Path, components_dir: str, force: bool = False) -> Path:
    """写入 sng-ui.yml 并创建组件目录

    已存在配置且未指定 force 时拒绝覆盖。
    """
    if not components_dir.strip():
        raise ConfigError("components_dir 不能为空")

    config_path = Path(cwd) / CONFIG_FILE
    if config_path.exists() and not force:
        raise ConfigError(
            f"配置文件已存在: {CONFIG_FILE}。使用 --force 覆盖。"
        )

    save_yaml(config_path, {"components_dir": components_dir})
    (Path(cwd) / components_dir).resolve().mkdir(parents=True, exist_ok=True)
    logger.info("配置已写入: %s (components_dir=%s)", config_path, components_dir)
    return config_path
