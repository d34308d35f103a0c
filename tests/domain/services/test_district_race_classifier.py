"""DistrictRaceClassifier（小選挙区の情勢判定）のテスト."""

import pytest

from src.domain.services.district_race_classifier import DistrictRaceClassifier
from src.domain.value_objects.district_race import (
    CandidateStatus,
    DistrictRaceInput,
    DistrictRaceStatus,
    RaceEntry,
    RaceStatus,
)


def _race(
    leader: int | None,
    runner_up: int | None,
    total: int,
    remaining: int,
    previous_holder: str | None = None,
    leader_id: str = "A",
    runner_up_id: str = "B",
) -> DistrictRaceInput:
    return DistrictRaceInput(
        leader=RaceEntry(leader_id, leader) if leader is not None else None,
        runner_up=RaceEntry(runner_up_id, runner_up) if runner_up is not None else None,
        total_votes=total,
        remaining_votes_estimate=remaining,
        previous_holder=previous_holder,
    )


@pytest.fixture()
def classifier() -> DistrictRaceClassifier:
    return DistrictRaceClassifier()


class TestClassify:
    """classifyメソッドのテスト."""

    def test_decided_and_held(self, classifier):
        """逆転不可能で前回と同じリストなら維持（確定）."""
        status = classifier.classify(_race(52000, 48000, 100000, 0, "A"))

        assert status == DistrictRaceStatus(
            RaceStatus.HELD, is_final=True, acting_identifier="A"
        )

    def test_too_close(self, classifier):
        """票差が開票数の1%以下で逆転可能なら接戦."""
        status = classifier.classify(_race(50200, 49800, 100000, 5000))

        assert status.label is RaceStatus.TOO_CLOSE
        assert not status.is_final
        assert status.acting_identifier == "A"

    def test_leading(self, classifier):
        """票差が1%超で逆転可能ならリード."""
        status = classifier.classify(_race(6000, 4000, 10000, 5000))

        assert status == DistrictRaceStatus(
            RaceStatus.LEADING, is_final=False, acting_identifier="A"
        )

    def test_decided_and_gained(self, classifier):
        """逆転不可能で前回と異なるリストなら獲得（確定）."""
        status = classifier.classify(_race(7000, 2000, 9000, 1000, "B"))

        assert status == DistrictRaceStatus(
            RaceStatus.GAINED, is_final=True, acting_identifier="A"
        )

    def test_decided_without_previous_holder(self, classifier):
        """前回情報がなければ当選（確定）."""
        status = classifier.classify(_race(7000, 2000, 9000, 1000))

        assert status.label is RaceStatus.ELECTED
        assert status.is_final

    @pytest.mark.parametrize(
        "race",
        [
            _race(None, None, 0, 1000),
            _race(100, 50, 0, 1000),
            _race(0, 0, 0, 0),
        ],
        ids=["no_leader", "zero_total", "all_zero"],
    )
    def test_awaiting_data(self, classifier, race):
        """1位がいない、または開票数0ならデータ待ち."""
        status = classifier.classify(race)

        assert status == DistrictRaceStatus(RaceStatus.AWAITING_DATA, is_final=False)

    def test_single_candidate_without_remaining_votes(self, classifier):
        """候補者1名で残票なしなら確定."""
        status = classifier.classify(_race(500, None, 500, 0, "A"))

        assert status.label is RaceStatus.HELD
        assert status.is_final

    def test_single_candidate_with_remaining_votes(self, classifier):
        """候補者1名で残票ありならリード."""
        status = classifier.classify(_race(500, None, 500, 100))

        assert status == DistrictRaceStatus(
            RaceStatus.LEADING, is_final=False, acting_identifier="A"
        )

    def test_remaining_equal_to_margin_is_reversible(self, classifier):
        """残票が票差と同じなら逆転可能として扱う."""
        status = classifier.classify(_race(600, 400, 1000, 200))

        assert not status.is_final
        assert status.label is RaceStatus.LEADING

    def test_remaining_just_below_margin_is_final(self, classifier):
        """残票が票差未満なら確定."""
        status = classifier.classify(_race(600, 400, 1000, 199))

        assert status.is_final

    def test_negative_remaining_is_treated_as_zero(self, classifier):
        """負の残票見込みは0として扱う."""
        status = classifier.classify(_race(501, 499, 1000, -50))

        assert status.is_final
        assert status.label is RaceStatus.ELECTED

    def test_tied_race_with_remaining_votes_is_too_close(self, classifier):
        """同票で残票があれば接戦."""
        status = classifier.classify(_race(500, 500, 1000, 10))

        assert status.label is RaceStatus.TOO_CLOSE
        assert not status.is_final

    def test_custom_too_close_threshold(self):
        """接戦とみなす票差の閾値を変更できる."""
        classifier = DistrictRaceClassifier(too_close_margin_percent=5.0)

        status = classifier.classify(_race(5100, 4900, 10000, 3000))

        assert status.label is RaceStatus.TOO_CLOSE


class TestMisorderedInput:
    """1位・2位の並び順が逆の入力のテスト."""

    def test_small_gap_with_enough_remaining_is_too_close(self, classifier):
        """差が小さく残票が差を上回れば接戦（1位として渡された側を対象とする）."""
        status = classifier.classify(_race(49900, 50100, 100000, 1000))

        assert status == DistrictRaceStatus(
            RaceStatus.TOO_CLOSE, is_final=False, acting_identifier="A"
        )

    def test_otherwise_contested(self, classifier):
        """それ以外は判定保留."""
        status = classifier.classify(_race(49900, 50100, 100000, 100))

        assert status == DistrictRaceStatus(RaceStatus.CONTESTED, is_final=False)

    def test_large_gap_is_contested(self, classifier):
        """差が大きければ残票があっても判定保留."""
        status = classifier.classify(_race(30000, 70000, 100000, 90000))

        assert status.label is RaceStatus.CONTESTED
        assert status.acting_identifier is None


class TestClassifyProperties:
    """情勢判定の性質のテスト."""

    def test_final_only_when_margin_exceeds_remaining(self, classifier):
        """確定は残票が票差を下回る場合に限られる."""
        for leader in range(0, 120, 7):
            for runner_up in range(0, leader + 1, 5):
                for remaining in range(0, 60, 3):
                    race = _race(leader, runner_up, leader + runner_up, remaining)
                    status = classifier.classify(race)
                    if status.is_final:
                        assert remaining < leader - runner_up

    @pytest.mark.parametrize(
        "previous_holder,expected",
        [
            ("A", RaceStatus.HELD),
            ("B", RaceStatus.GAINED),
            ("C", RaceStatus.GAINED),
            (None, RaceStatus.ELECTED),
            ("", RaceStatus.ELECTED),
        ],
        ids=["same", "runner_up", "third_party", "none", "blank"],
    )
    def test_gain_vs_hold(self, classifier, previous_holder, expected):
        """確定時のラベルは前回保持リストとの一致で決まる."""
        status = classifier.classify(_race(800, 100, 900, 0, previous_holder))

        assert status.label is expected
        assert status.label.is_decided

    def test_same_input_same_output(self, classifier):
        """同じ入力には常に同じ結果を返す."""
        race = _race(50200, 49800, 100000, 5000)

        assert classifier.classify(race) == classifier.classify(race)


class TestCandidateStatus:
    """candidate_statusメソッドのテスト."""

    @pytest.mark.parametrize(
        "status,candidate,is_leader,expected",
        [
            (
                DistrictRaceStatus(RaceStatus.HELD, True, "A"),
                "A",
                True,
                CandidateStatus.ELECTED,
            ),
            (
                DistrictRaceStatus(RaceStatus.LEADING, False, "A"),
                "A",
                True,
                CandidateStatus.LEADING,
            ),
            (
                DistrictRaceStatus(RaceStatus.TOO_CLOSE, False, "A"),
                "A",
                True,
                CandidateStatus.LEADING,
            ),
            (
                DistrictRaceStatus(RaceStatus.GAINED, True, "A"),
                "B",
                False,
                CandidateStatus.PROCESSING,
            ),
            (
                DistrictRaceStatus(RaceStatus.AWAITING_DATA, False),
                "A",
                True,
                CandidateStatus.PROCESSING,
            ),
            (
                DistrictRaceStatus(RaceStatus.CONTESTED, False),
                "A",
                True,
                CandidateStatus.PROCESSING,
            ),
            (
                DistrictRaceStatus(RaceStatus.TOO_CLOSE, False),
                "A",
                True,
                CandidateStatus.LEADING,
            ),
            (
                DistrictRaceStatus(RaceStatus.TOO_CLOSE, False),
                "B",
                False,
                CandidateStatus.PROCESSING,
            ),
        ],
        ids=[
            "final_winner",
            "leading",
            "too_close_acting",
            "final_loser",
            "awaiting",
            "contested",
            "too_close_leader_without_acting",
            "too_close_other_without_acting",
        ],
    )
    def test_candidate_status(self, status, candidate, is_leader, expected):
        """選挙区の情勢から候補者の簡略状態が決まる."""
        assert (
            DistrictRaceClassifier.candidate_status(status, candidate, is_leader)
            is expected
        )
