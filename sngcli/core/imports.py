"""导入语句提取与本地导入解析

只做窄范围的文本匹配，不做完整语法分析：先去掉注释，再用一个组合正则
抓取 `from '<spec>'` 和 `import '<spec>'` 两种形式的说明符。

说明符分两类:
  - 本地: 以 "." 开头，解析为源码树中的具体文件
  - 外部: 其余全部，归一化为包名；常驻白名单与库自身包名不上报
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from sngcli.core.exceptions import InstallError

logger = logging.getLogger(__name__)

EXCLUDED_SUFFIXES = (".spec.ts", ".stories.ts")
SOURCE_EXTENSIONS = (".ts", ".js")
INDEX_FILES = tuple(f"index{ext}" for ext in SOURCE_EXTENSIONS)

SELF_PACKAGE = "sng-ui"

# 使用方项目中必然存在的依赖，从不作为外部包上报
ALWAYS_AVAILABLE_IMPORTS = frozenset({
    "@angular/animations",
    "@angular/common",
    "@angular/core",
    "@angular/forms",
    "@angular/platform-browser",
    "@angular/router",
    "rxjs",
    "tslib",
})
BUILTIN_PREFIX = "node:"

_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)
_IMPORT_RE = re.compile(r"""\bfrom\s+['"]([^'"]+)['"]|import\s+['"]([^'"]+)['"]""")


# =========================================================================
# 分类
# =========================================================================

def is_excluded(path: str | Path) -> bool:
    """测试文件和故事文件永远不属于任何组件"""
    return str(path).endswith(EXCLUDED_SUFFIXES)


def is_local(specifier: str) -> bool:
    return specifier.startswith(".")


def is_always_available(specifier: str) -> bool:
    return specifier in ALWAYS_AVAILABLE_IMPORTS or specifier.startswith(BUILTIN_PREFIX)


def to_package_name(specifier: str) -> str:
    """外部说明符 → 包名

    带 scope 的保留前两段（@scope/name），否则只保留第一段。
    """
    parts = specifier.split("/")
    if specifier.startswith("@"):
        return "/".join(parts[:2]) if len(parts) >= 2 else specifier
    return parts[0]


def external_package(specifier: str) -> str | None:
    """返回需上报的外部包名；白名单、Node 内置模块与库自身返回 None"""
    if is_always_available(specifier):
        return None
    name = to_package_name(specifier)
    if name in ALWAYS_AVAILABLE_IMPORTS or name == SELF_PACKAGE:
        return None
    return name


# =========================================================================
# 提取
# =========================================================================

def extract_imports_from_text(text: str) -> list[str]:
    """从源码文本中按出现顺序提取导入说明符"""
    content = _BLOCK_COMMENT_RE.sub("", text)
    content = _LINE_COMMENT_RE.sub("", content)
    return [m.group(1) or m.group(2) for m in _IMPORT_RE.finditer(content)]


def extract_imports(path: str | Path) -> list[str]:
    """读取文件并提取导入说明符

    组件目录下也可能有图片、字体等二进制资源，按 UTF-8 宽松解码
    （非法字节替换为 U+FFFD），不会因编码问题中断遍历。
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InstallError(f"读取失败: {path} ({e})") from e
    return extract_imports_from_text(text)


# =========================================================================
# 本地解析
# =========================================================================

def _candidates(base: Path) -> list[Path]:
    return [
        base,
        *(Path(f"{base}{ext}") for ext in SOURCE_EXTENSIONS),
        *(base / name for name in INDEX_FILES),
    ]


def resolve_local(from_file: str | Path, specifier: str, source_root: str | Path) -> Path | None:
    """把本地说明符解析为具体文件

    依次尝试: 原路径、追加扩展名、目录下的 index 文件，首个命中者生效。
    找不到、命中测试/故事文件、或落在源码根目录之外时返回 None，
    调用方静默忽略（导入可能合法地指向受管目录之外）。
    """
    base = Path(os.path.normpath(Path(from_file).parent / specifier))
    root = Path(source_root)

    for candidate in _candidates(base):
        if not candidate.is_file():
            continue
        if is_excluded(candidate):
            logger.debug("忽略测试/故事文件导入: %s -> %s", from_file, candidate)
            return None
        if not candidate.is_relative_to(root):
            logger.debug("忽略源码目录之外的导入: %s -> %s", from_file, candidate)
            return None
        return candidate
    return None
