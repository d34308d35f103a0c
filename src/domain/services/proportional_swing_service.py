"""比例得票率・議席の前回比較（スイング）ドメインサービス."""

from collections.abc import Mapping

from src.domain.value_objects.election_reference import RegionReference
from src.domain.value_objects.national_seat_totals import ProportionalSwingEntry
from src.domain.value_objects.seat_allocation import SeatAllocationResult
from src.domain.value_objects.vote_tally import Tally


# 表示対象とする得票率の下限（%）
_MIN_VISIBLE_PERCENT = 0.001


class ProportionalSwingService:
    """比例代表の前回比較を行うドメインサービス."""

    @staticmethod
    def region_swing(
        current: Tally,
        reference: RegionReference,
        allocation: SeatAllocationResult | None = None,
    ) -> list[ProportionalSwingEntry]:
        """地域内のリスト別スイング（変化の大きい順）."""
        identifiers = (
            set(current)
            | set(reference.previous_seats)
            | set(reference.previous_percentages)
            | set(reference.previous_votes)
        )
        entries = [
            ProportionalSwingEntry(
                identifier=identifier,
                current_percent=current.share_percent(identifier),
                previous_percent=reference.previous_percent(identifier) or 0.0,
                current_seats=allocation.seats_for(identifier) if allocation else 0,
                previous_seats=reference.previous_seats.get(identifier, 0),
                region=reference.region,
            )
            for identifier in identifiers
        ]
        return ProportionalSwingService._sorted_visible(entries)

    @staticmethod
    def national_swing(
        current_by_region: Mapping[str, Tally],
        references: Mapping[str, RegionReference],
        allocations: Mapping[str, SeatAllocationResult] | None = None,
    ) -> list[ProportionalSwingEntry]:
        """全国のリスト別スイング.

        前回の全国得票率は各地域の前回得票数の合計から求める。
        """
        current_total = Tally()
        for tally in current_by_region.values():
            current_total = current_total.merged(tally)

        previous_total = Tally()
        for reference in references.values():
            previous_total = previous_total.merged(reference.previous_votes)

        current_seats: dict[str, int] = {}
        for allocation in (allocations or {}).values():
            for identifier, seats in allocation.seats.items():
                current_seats[identifier] = current_seats.get(identifier, 0) + seats

        previous_seats: dict[str, int] = {}
        for reference in references.values():
            for identifier, seats in reference.previous_seats.items():
                previous_seats[identifier] = previous_seats.get(identifier, 0) + seats

        identifiers = (
            set(current_total) | set(previous_total) | set(previous_seats)
        )
        entries = [
            ProportionalSwingEntry(
                identifier=identifier,
                current_percent=current_total.share_percent(identifier),
                previous_percent=previous_total.share_percent(identifier),
                current_seats=current_seats.get(identifier, 0),
                previous_seats=previous_seats.get(identifier, 0),
            )
            for identifier in identifiers
        ]
        return ProportionalSwingService._sorted_visible(entries)

    @staticmethod
    def _sorted_visible(
        entries: list[ProportionalSwingEntry],
    ) -> list[ProportionalSwingEntry]:
        visible = [
            e
            for e in entries
            if e.current_percent > _MIN_VISIBLE_PERCENT
            or e.previous_percent > _MIN_VISIBLE_PERCENT
            or e.current_seats > 0
            or e.previous_seats > 0
        ]
        return sorted(visible, key=lambda e: (-abs(e.swing), e.identifier))
