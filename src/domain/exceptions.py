"""ドメイン層の例外定義.

議席計算エンジンが送出する例外の基底クラスと具体的な例外を定義する。
開票途中の欠損値（DataGap）は例外ではなく値オブジェクトとして扱うため、
ここで定義するのは設定・入力が明らかに不正な場合に限られる。
"""

from typing import Any


class DomainException(Exception):
    """ドメイン例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class InvalidArgumentException(DomainException):
    """負の議席数・負の得票数など、計算に渡せない引数が指定された."""

    def __init__(self, argument: str, value: Any, reason: str) -> None:
        super().__init__(
            f"不正な引数 {argument}: {reason}",
            {"argument": argument, "value": value},
        )
        self.argument = argument
        self.value = value


class ReferenceDataError(DomainException):
    """選挙参照データ（定数・前回結果等）の読み込みに失敗した."""
