"""structlogによるロギング設定."""

import logging
import sys

from typing import Any

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """structlogと標準loggingを設定する.

    Args:
        level: ログレベル（"DEBUG", "INFO" 等）
        json_logs: TrueならJSON形式、Falseならコンソール形式で出力する
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """名前付きロガーを取得する.

    出力先は標準loggingのロガーとし、ハンドラやレベルは設定しない。
    setup_logging を呼ぶまではホスト側のlogging設定に従う。
    """
    return structlog.wrap_logger(logging.getLogger(name))
