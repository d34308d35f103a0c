"""ProportionalSwingServiceのテスト."""

import pytest

from src.domain.services.proportional_swing_service import ProportionalSwingService
from src.domain.value_objects.election_reference import RegionReference
from src.domain.value_objects.seat_allocation import SeatAllocationResult
from src.domain.value_objects.vote_tally import Tally


@pytest.fixture()
def north() -> RegionReference:
    return RegionReference(
        region="N",
        proportional_seats=4,
        previous_seats={"A": 2, "C": 1},
        previous_percentages={"A": 50.0, "B": 40.0, "C": 10.0},
        previous_votes={"A": 500, "B": 400, "C": 100},
    )


@pytest.fixture()
def south() -> RegionReference:
    return RegionReference(
        region="S",
        proportional_seats=2,
        previous_seats={"B": 2},
        previous_votes={"A": 100, "B": 900},
    )


class TestRegionSwing:
    """region_swingメソッドのテスト."""

    def test_swing_sorted_by_magnitude(self, north):
        """変化の大きい順（同じ大きさは識別子順）に並ぶ."""
        current = Tally({"A": 60, "B": 40})
        allocation = SeatAllocationResult({"A": 3, "B": 1}, 4, 0, region="N")

        entries = ProportionalSwingService.region_swing(current, north, allocation)

        assert [e.identifier for e in entries] == ["A", "C", "B"]
        a, c, b = entries
        assert a.swing == pytest.approx(10.0)
        assert c.swing == pytest.approx(-10.0)
        assert b.swing == pytest.approx(0.0)
        assert a.seat_change == 1
        assert c.seat_change == -1
        assert all(e.region == "N" for e in entries)

    def test_previous_percent_derived_from_votes(self, south):
        """前回得票率がなければ前回得票数から求める."""
        entries = ProportionalSwingService.region_swing(
            Tally({"A": 50, "B": 50}), south
        )

        by_id = {e.identifier: e for e in entries}
        assert by_id["A"].previous_percent == pytest.approx(10.0)
        assert by_id["A"].swing == pytest.approx(40.0)
        assert by_id["B"].current_seats == 0
        assert by_id["B"].seat_change == -2

    def test_invisible_lists_are_dropped(self, north):
        """今回・前回とも得票も議席もないリストは除外する."""
        entries = ProportionalSwingService.region_swing(
            Tally({"A": 10, "Z": 0}), north
        )

        assert "Z" not in {e.identifier for e in entries}


class TestNationalSwing:
    """national_swingメソッドのテスト."""

    def test_national_swing_from_summed_votes(self, north, south):
        """全国の前回得票率は各地域の前回得票数の合計から求める."""
        current = {"N": Tally({"A": 300, "B": 100}), "S": Tally({"B": 100})}
        allocations = {
            "N": SeatAllocationResult({"A": 3, "B": 1}, 4, 0, region="N"),
            "S": SeatAllocationResult({"B": 2}, 2, 0, region="S"),
        }

        entries = ProportionalSwingService.national_swing(
            current, {"N": north, "S": south}, allocations
        )

        by_id = {e.identifier: e for e in entries}
        # 前回: A 600, B 1300, C 100 / 2000
        assert by_id["A"].previous_percent == pytest.approx(30.0)
        assert by_id["A"].current_percent == pytest.approx(60.0)
        assert by_id["B"].previous_percent == pytest.approx(65.0)
        assert by_id["B"].current_percent == pytest.approx(40.0)
        assert by_id["C"].current_percent == 0.0
        assert by_id["A"].current_seats == 3
        assert by_id["A"].previous_seats == 2
        assert by_id["B"].current_seats == 3
        assert by_id["B"].previous_seats == 2
        assert by_id["A"].region is None
        assert entries[0].identifier == "A"

    def test_without_allocations(self, north):
        """配分結果がなければ今回の議席は0."""
        entries = ProportionalSwingService.national_swing(
            {"N": Tally({"A": 1})}, {"N": north}
        )

        assert all(e.current_seats == 0 for e in entries)
