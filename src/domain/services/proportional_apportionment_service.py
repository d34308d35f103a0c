"""比例代表の議席配分ドメインサービス（ドント方式 + 阻止条項）.

処理フロー:
    1. 有効投票総数を求める（0票または0議席なら全リスト0議席）
    2. 得票率が阻止条項（barrier_percent）未満のリストを除外
    3. 対象リストの得票数を 1, 2, ..., total_seats で割った商を列挙
    4. 商の大きい順に total_seats 個まで1議席ずつ割り当てる
    5. 商が不足した分（全リストが阻止条項で除外された場合など）は未配分とする

商の比較は fractions.Fraction による厳密比較で行い、同値の場合は
tie_break_key の昇順（既定: 得票数の多い順 → 識別子の昇順）で決める。
"""

from __future__ import annotations

import math

from collections.abc import Callable, Mapping
from fractions import Fraction
from typing import Any

from src.domain.exceptions import InvalidArgumentException
from src.domain.value_objects.seat_allocation import SeatAllocationResult


TieBreakKey = Callable[[str, int], Any]


def default_tie_break_key(identifier: str, votes: int) -> tuple[int, str]:
    """同じ商のリスト間の優先順位（小さいほど優先）: 得票数降順 → 識別子昇順."""
    return (-votes, identifier)


class ProportionalApportionmentService:
    """ドント方式で比例代表の議席を配分するドメインサービス."""

    def __init__(self, tie_break_key: TieBreakKey | None = None) -> None:
        self._tie_break_key = tie_break_key or default_tie_break_key

    def apportion(
        self,
        votes: Mapping[str, int],
        total_seats: int,
        barrier_percent: float = 5.0,
        region: str | None = None,
    ) -> SeatAllocationResult:
        """地域内のリスト別得票から議席を配分する.

        Args:
            votes: リスト識別子→得票数
            total_seats: 配分する議席数（0以上）
            barrier_percent: 阻止条項（%）。得票率がこれ未満のリストは議席を得ない
            region: 結果に付与する地域名

        Returns:
            議席配分結果。入力に登場した全リストを含む（議席なしは0）。

        Raises:
            InvalidArgumentException: 議席数・得票数・阻止条項が負、または阻止条項が
                NaN・無限大の場合
        """
        self._validate(votes, total_seats, barrier_percent)

        seats = dict.fromkeys(votes, 0)
        total_votes = sum(votes.values())
        if total_votes == 0 or total_seats == 0:
            return SeatAllocationResult(
                seats=seats,
                total_seats=total_seats,
                unallocated=total_seats,
                region=region,
            )

        eligible = self.eligible_lists(votes, barrier_percent)
        excluded = frozenset(votes) - frozenset(eligible)

        ranked = self.ranked_quotients(
            {identifier: votes[identifier] for identifier in eligible}, total_seats
        )
        for identifier, _quotient in ranked[:total_seats]:
            seats[identifier] += 1

        allocated = sum(seats.values())
        return SeatAllocationResult(
            seats=seats,
            total_seats=total_seats,
            unallocated=total_seats - allocated,
            region=region,
            excluded=excluded,
        )

    @staticmethod
    def eligible_lists(votes: Mapping[str, int], barrier_percent: float) -> list[str]:
        """阻止条項を満たし、かつ得票のあるリストを返す.

        得票率 < barrier_percent を整数演算で判定する（votes * 100 < barrier * total）。
        """
        total_votes = sum(votes.values())
        if total_votes == 0:
            return []
        barrier = Fraction(str(barrier_percent))
        return [
            identifier
            for identifier, count in votes.items()
            if count > 0 and count * 100 >= barrier * total_votes
        ]

    def ranked_quotients(
        self, votes: Mapping[str, int], max_divisor: int
    ) -> list[tuple[str, Fraction]]:
        """全リスト・除数 1..max_divisor の商を配分順に並べて返す."""
        quotients: list[tuple[Fraction, Any, int, str]] = []
        for identifier, count in votes.items():
            order = self._tie_break_key(identifier, count)
            for divisor in range(1, max_divisor + 1):
                quotients.append((Fraction(count, divisor), order, divisor, identifier))

        quotients.sort(key=lambda q: (-q[0], q[1], q[2]))
        return [(identifier, quotient) for quotient, _, _, identifier in quotients]

    @staticmethod
    def _validate(
        votes: Mapping[str, int], total_seats: int, barrier_percent: float
    ) -> None:
        if total_seats < 0:
            raise InvalidArgumentException(
                "total_seats", total_seats, "議席数が負の値です"
            )
        if not math.isfinite(barrier_percent):
            raise InvalidArgumentException(
                "barrier_percent", barrier_percent, "阻止条項が有限の数値ではありません"
            )
        if barrier_percent < 0:
            raise InvalidArgumentException(
                "barrier_percent", barrier_percent, "阻止条項が負の値です"
            )
        for identifier, count in votes.items():
            if count < 0:
                raise InvalidArgumentException(
                    "votes", count, f"{identifier} の得票数が負の値です"
                )


def apportion(
    votes: Mapping[str, int],
    total_seats: int,
    barrier_percent: float = 5.0,
    tie_break_key: TieBreakKey | None = None,
) -> SeatAllocationResult:
    """ProportionalApportionmentService.apportion の関数版."""
    return ProportionalApportionmentService(tie_break_key).apportion(
        votes, total_seats, barrier_percent
    )
