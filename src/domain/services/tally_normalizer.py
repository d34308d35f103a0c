"""得票数正規化サービス.

数値・ロケール書式の文字列（"1.234.567"、"12,5"）・欠損値が混在する
得票データを、識別子→非負整数のTallyに変換する。
解釈できない値は例外にせず0として扱い、DataGapとして報告する。
"""

import math
import re
import unicodedata

from collections import defaultdict
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from numbers import Rational, Real

from src.domain.value_objects.vote_tally import (
    DataGap,
    NormalizedTally,
    Tally,
    VoteRecord,
)


# 全角・半角スペース
_WHITESPACE_RE = re.compile(r"\s+")

GAP_MISSING = "missing"
GAP_UNPARSEABLE = "unparseable"
GAP_NEGATIVE = "negative"


class TallyNormalizer:
    """得票数正規化サービス."""

    @staticmethod
    def parse_vote_count(value: object) -> tuple[int, str | None]:
        """1つの生の値を得票数に変換する.

        処理順序:
        1. None・空文字・NaN → 欠損
        2. 数値 → 小数部を切り捨て（整数・Fraction・Decimalは浮動小数点を経由しない）
        3. 文字列 → NFKC正規化、スペース除去、千区切り"."除去、小数点","→"."

        Returns:
            (得票数, 欠損理由)。正常に解釈できた場合、欠損理由はNone。
        """
        if value is None or isinstance(value, bool):
            return 0, GAP_MISSING

        number: Real | Decimal
        if isinstance(value, Rational):
            number = value
        elif isinstance(value, Decimal):
            if value.is_nan():
                return 0, GAP_MISSING
            if value.is_infinite():
                return 0, GAP_UNPARSEABLE
            number = value
        elif isinstance(value, Real):
            number = float(value)
            if math.isnan(number):
                return 0, GAP_MISSING
            if math.isinf(number):
                return 0, GAP_UNPARSEABLE
        elif isinstance(value, str):
            text = unicodedata.normalize("NFKC", value)
            text = _WHITESPACE_RE.sub("", text)
            if text == "":
                return 0, GAP_MISSING
            text = text.replace(".", "").replace(",", ".")
            try:
                number = Decimal(text)
            except InvalidOperation:
                return 0, GAP_UNPARSEABLE
            if not number.is_finite():
                return 0, GAP_UNPARSEABLE
        else:
            return 0, GAP_UNPARSEABLE

        if number < 0:
            return 0, GAP_NEGATIVE
        return int(number), None

    @staticmethod
    def normalize(entries: Iterable[tuple[str, object]]) -> NormalizedTally:
        """(識別子, 生の値) の並びをTallyに変換する.

        同一識別子の値は合算する。
        """
        counts: dict[str, int] = {}
        gaps: list[DataGap] = []
        for identifier, raw_value in entries:
            votes, reason = TallyNormalizer.parse_vote_count(raw_value)
            if reason is not None:
                gaps.append(DataGap(identifier, raw_value, reason))
            counts[identifier] = counts.get(identifier, 0) + votes
        return NormalizedTally(Tally(counts), tuple(gaps))

    @staticmethod
    def to_tally(entries: Iterable[tuple[str, object]]) -> Tally:
        """欠損情報が不要な場合の簡易版."""
        return TallyNormalizer.normalize(entries).tally

    @staticmethod
    def normalize_by_region(
        records: Iterable[VoteRecord],
    ) -> dict[str, NormalizedTally]:
        """比例得票レコードを地域ごとに正規化する."""
        grouped: dict[str, list[tuple[str, object]]] = defaultdict(list)
        for record in records:
            grouped[record.region].append((record.list_identifier, record.vote_count))
        return {
            region: TallyNormalizer.normalize(entries)
            for region, entries in grouped.items()
        }
