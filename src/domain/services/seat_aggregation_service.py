"""議席集計ドメインサービス.

地域ごとの比例配分結果と、確定した小選挙区の当選リストを合算して
全国のリスト別議席数を求める。合計が定数と一致しない場合は
ConsistencyWarning を結果に添える（開票途中は不足するのが通常のため例外にしない）。
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src.domain.value_objects.district_race import DistrictRaceStatus
from src.domain.value_objects.national_seat_totals import (
    CoalitionSeats,
    ConsistencyWarning,
    NationalSeatTotals,
    SeatChangeSummary,
)
from src.domain.value_objects.seat_allocation import SeatAllocationResult


class SeatAggregationService:
    """比例・小選挙区の議席を集計するドメインサービス."""

    @staticmethod
    def decided_winners(
        statuses: Mapping[str, DistrictRaceStatus],
    ) -> dict[str, str]:
        """確定した選挙区のみ 選挙区ID→当選リスト を返す."""
        return {
            district_id: status.acting_identifier
            for district_id, status in statuses.items()
            if status.is_final and status.acting_identifier is not None
        }

    @staticmethod
    def aggregate(
        allocations: Iterable[SeatAllocationResult],
        district_winners: Mapping[str, str],
        expected_total: int,
    ) -> NationalSeatTotals:
        """全国のリスト別議席数を集計する.

        Args:
            allocations: 地域ごとの比例配分結果
            district_winners: 確定した選挙区ID→当選リスト
            expected_total: 定数（総議席数）

        Returns:
            全国集計。合計≠定数なら warning が設定される。
        """
        proportional: dict[str, int] = {}
        for allocation in allocations:
            for identifier, seats in allocation.seats.items():
                proportional[identifier] = proportional.get(identifier, 0) + seats

        district: dict[str, int] = {}
        for identifier in district_winners.values():
            district[identifier] = district.get(identifier, 0) + 1

        totals = dict(proportional)
        for identifier, seats in district.items():
            totals[identifier] = totals.get(identifier, 0) + seats

        actual_total = sum(totals.values())
        warning = (
            ConsistencyWarning(expected_total, actual_total)
            if actual_total != expected_total
            else None
        )
        return NationalSeatTotals(
            seats=totals,
            expected_total=expected_total,
            proportional_seats=proportional,
            district_seats=district,
            warning=warning,
        )

    @staticmethod
    def seat_changes(
        statuses: Mapping[str, DistrictRaceStatus],
        previous_holders: Mapping[str, str | None],
    ) -> dict[str, SeatChangeSummary]:
        """確定した選挙区について、前回からの議席の維持・獲得・喪失を数える.

        前回保持リストがない選挙区の当選は「獲得」として数える。
        """
        summary: dict[str, SeatChangeSummary] = {}

        def _entry(identifier: str) -> SeatChangeSummary:
            return summary.setdefault(identifier, SeatChangeSummary())

        for district_id, status in statuses.items():
            winner = status.acting_identifier
            if not status.is_final or winner is None:
                continue
            previous = previous_holders.get(district_id)
            if not previous:
                _entry(winner).gained += 1
            elif previous == winner:
                _entry(winner).held += 1
            else:
                _entry(winner).gained += 1
                _entry(previous).lost += 1
        return dict(sorted(summary.items()))

    @staticmethod
    def coalition(totals: NationalSeatTotals, members: Iterable[str]) -> CoalitionSeats:
        """指定リストの組み合わせの議席合計と過半数到達を求める."""
        unique = tuple(dict.fromkeys(members))
        seats = sum(totals.seats.get(identifier, 0) for identifier in unique)
        return CoalitionSeats(unique, seats, totals.majority_threshold)

    @staticmethod
    def region_chamber(
        allocation: SeatAllocationResult,
        district_winners: Iterable[str],
    ) -> dict[str, int]:
        """地域単位の構成（比例 + その地域の確定小選挙区）."""
        seats = {k: v for k, v in allocation.seats.items() if v > 0}
        for identifier in district_winners:
            seats[identifier] = seats.get(identifier, 0) + 1
        return dict(sorted(seats.items(), key=lambda item: (-item[1], item[0])))
