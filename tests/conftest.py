"""测试套共享 fixture — 在 tmp_path 下搭建一棵最小的组件库源码树

目录结构:

  src/lib/
  ├── alpha/        外部依赖 left-pad
  ├── beta/         引用 ../alpha，外部依赖 right-pad
  ├── button/       index.ts + 类型文件 + 测试/故事文件
  ├── menu/         通过目录 index 引用 ../button
  ├── sng-table/    带前缀，别名 table；引用内部单元 sng-table-core
  ├── sng-table-core/
  └── styles/       保留目录，不是组件
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from sngcli.utils.logger import reset_logging

LIBRARY: dict[str, str] = {
    "alpha/alpha.ts": (
        "import { leftPad } from 'left-pad';\n"
        "export const alpha = leftPad('a', 2);\n"
    ),
    "beta/beta.ts": (
        "import { alpha } from '../alpha/alpha';\n"
        "import { rightPad } from 'right-pad/lib/index';\n"
        "export const beta = rightPad(alpha, 3);\n"
    ),
    "button/index.ts": "export * from './sng-button';\n",
    "button/sng-button.ts": (
        "import { Component, input } from '@angular/core';\n"
        "import { clsx } from 'clsx';\n"
        "import { twMerge } from 'tailwind-merge';\n"
        "import type { SngButtonType } from './sng-button.types';\n"
        "export class SngButton {}\n"
    ),
    "button/sng-button.types.ts": "export type SngButtonType = 'button' | 'submit';\n",
    "button/sng-button.spec.ts": (
        "import { TestBed } from '@angular/core/testing';\n"
        "import { SngMenu } from '../menu/sng-menu';\n"
        "import 'jasmine-extras';\n"
    ),
    "button/sng-button.stories.ts": "import type { Meta } from '@storybook/angular';\n",
    "menu/sng-menu.ts": (
        "import { Overlay } from '@angular/cdk/overlay';\n"
        "import { SngButton } from '../button';\n"
        "import { Subject } from 'rxjs';\n"
        "export class SngMenu {}\n"
    ),
    "sng-table/sng-table.ts": (
        "import { CdkTable } from '@angular/cdk/table';\n"
        "import { tableCore } from '../sng-table-core/table-core';\n"
        "export class SngTable {}\n"
    ),
    "sng-table-core/table-core.ts": (
        "import { twMerge } from 'tailwind-merge';\n"
        "export const tableCore = twMerge('a');\n"
    ),
    "styles/theme.css": ":root { --radius: 0.5rem; }\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """按 {相对路径: 内容} 写出文件树，返回 root"""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def lib_root(tmp_path: Path) -> Path:
    """示例组件库的源码根目录"""
    return write_tree(tmp_path / "library" / "src" / "lib", LIBRARY)


@pytest.fixture()
def make_tree() -> Callable[[Path, dict[str, str]], Path]:
    return write_tree


@pytest.fixture(autouse=True)
def _clean_logging() -> Iterator[None]:
    yield
    reset_logging()
