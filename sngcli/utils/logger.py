"""sng-ui 日志配置

日志统一输出到 stderr，stdout 只留给安装报告和 npm install 提示，
方便使用方在脚本里直接捕获报告内容。

环境变量:
  SNGUI_LOG_LEVEL  日志级别名或数字（默认 WARNING，无法识别时回退 WARNING）
  SNGUI_LOG_JSON   1/true/yes/on 时输出单行 JSON，适合 CI 收集
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from datetime import datetime, timezone

LOG_LEVEL_ENV = "SNGUI_LOG_LEVEL"
LOG_JSON_ENV = "SNGUI_LOG_JSON"
DEFAULT_LEVEL = "WARNING"

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
TEXT_DATEFMT = "%H:%M:%S"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class JSONFormatter(logging.Formatter):
    """单行 JSON 日志

    输出示例:
        {"timestamp": "2024-01-01T12:00:00+00:00", "level": "INFO",
         "logger": "sngcli.core.installer", "message": "...", "line": 42}

    中文消息原样输出（ensure_ascii=False）。有异常时追加 "exception" 字段。
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def parse_level(value: str | None) -> int:
    """日志级别名（大小写不敏感）或数字 → logging 级别"""
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def setup_logging(level: str | int = DEFAULT_LEVEL, json_output: bool = False) -> None:
    """配置根日志器：清掉已有 handler，挂一个 stderr handler"""
    reset_logging()
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else parse_level(level))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT))
    root.addHandler(handler)


def setup_logging_from_env(environ: Mapping[str, str] | None = None) -> None:
    """按 SNGUI_LOG_LEVEL / SNGUI_LOG_JSON 配置日志，CLI 入口调用"""
    env = os.environ if environ is None else environ
    setup_logging(
        level=parse_level(env.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)),
        json_output=env.get(LOG_JSON_ENV, "").strip().lower() in _TRUTHY,
    )


def reset_logging() -> None:
    """移除并关闭根日志器上的全部 handler（测试之间复位用）"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
