"""ErrorCollection が使う structlog ロガー"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import LogSection

LOGGER_NAME = "error_bag"


def configure_logging(section: LogSection) -> None:
    """structlog を stdlib logging の上に設定し、error_bag ロガーのレベルを合わせる。"""
    log_level = getattr(logging, section.level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger(LOGGER_NAME).setLevel(log_level)

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if section.format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def new_logger(section: LogSection | None = None) -> structlog.stdlib.BoundLogger:
    """error_bag ロガーを返す。

    section.configure が True のときだけ structlog の全体設定を行い、
    それ以外はアプリケーション側の structlog 設定をそのまま使う。
    """
    section = section or LogSection()
    if section.configure:
        configure_logging(section)
    return structlog.stdlib.get_logger(LOGGER_NAME)
