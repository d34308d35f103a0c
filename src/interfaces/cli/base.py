"""CLIコマンドの共通基盤."""

import functools
import sys

from collections.abc import Callable
from typing import Any, NoReturn

import click

from src.common.logging import get_logger
from src.domain.exceptions import DomainException


logger = get_logger(__name__)


class BaseCommand:
    """出力ヘルパーを提供する基底クラス."""

    @staticmethod
    def warning(message: str) -> None:
        click.secho(f"⚠ {message}", fg="yellow", err=True)

    @staticmethod
    def error(message: str, exit_code: int = 1) -> NoReturn:
        click.secho(f"✗ {message}", fg="red", err=True)
        sys.exit(exit_code)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """ドメイン例外を終了コード1のエラー表示に変換するデコレータ."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DomainException as e:
            logger.error("コマンド実行エラー", command=func.__name__, error=str(e))
            BaseCommand.error(str(e))
        except FileNotFoundError as e:
            BaseCommand.error(f"ファイルが見つかりません: {e.filename}")
        except ValueError as e:
            BaseCommand.error(str(e))

    return wrapper
