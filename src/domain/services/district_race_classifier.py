"""小選挙区の情勢判定ドメインサービス.

開票途中のスナップショット（1位・2位の得票、開票済み総数、残票見込み、
前回の議席保持リスト）から、逆転の可能性を考慮した情勢ラベルを判定する。

判定順序:
    1. データなし（1位なし、または開票数0） → AWAITING_DATA
    2. 2位なし → 残票なしなら確定（HELD/GAINED/ELECTED）、あれば LEADING
    3. 1位が2位より少ない（入力の並び順の不整合） → TOO_CLOSE / CONTESTED
    4. 票差 m に対し残票 >= m なら逆転可能:
       m が開票数の1%超 → LEADING、1%以下 → TOO_CLOSE
       逆転不可能 → 確定（HELD/GAINED/ELECTED）

表示色などの見た目は扱わない。結果は抽象ラベルと対象リスト識別子のみ。
"""

from src.domain.value_objects.district_race import (
    CandidateStatus,
    DistrictRaceInput,
    DistrictRaceStatus,
    RaceStatus,
)


# 「接戦」とみなす票差の上限（開票数に対する%）
TOO_CLOSE_MARGIN_PERCENT = 1.0


class DistrictRaceClassifier:
    """小選挙区の情勢を判定するドメインサービス."""

    def __init__(self, too_close_margin_percent: float = TOO_CLOSE_MARGIN_PERCENT):
        self._too_close_margin_percent = too_close_margin_percent

    def classify(self, race: DistrictRaceInput) -> DistrictRaceStatus:
        """情勢を判定する.

        入力のみから決まる純粋関数で、同じ入力には常に同じ結果を返す。
        is_final=True は残票で票差が覆らない場合にのみ返す。
        """
        leader = race.leader
        remaining = max(race.remaining_votes_estimate, 0)
        if leader is None or race.total_votes == 0:
            return DistrictRaceStatus(RaceStatus.AWAITING_DATA, is_final=False)

        if race.runner_up is None:
            if remaining == 0:
                return self._decided(leader.identifier, race.previous_holder)
            return DistrictRaceStatus(
                RaceStatus.LEADING, is_final=False, acting_identifier=leader.identifier
            )

        margin = leader.votes - race.runner_up.votes

        if margin < 0:
            gap = -margin
            if (
                self._margin_percent(gap, race.total_votes)
                <= self._too_close_margin_percent
                and remaining > gap
            ):
                return DistrictRaceStatus(
                    RaceStatus.TOO_CLOSE,
                    is_final=False,
                    acting_identifier=leader.identifier,
                )
            return DistrictRaceStatus(RaceStatus.CONTESTED, is_final=False)

        reversible = remaining >= margin
        if reversible:
            if (
                self._margin_percent(margin, race.total_votes)
                > self._too_close_margin_percent
            ):
                label = RaceStatus.LEADING
            else:
                label = RaceStatus.TOO_CLOSE
            return DistrictRaceStatus(
                label, is_final=False, acting_identifier=leader.identifier
            )

        return self._decided(leader.identifier, race.previous_holder)

    @staticmethod
    def _margin_percent(margin: int, total_votes: int) -> float:
        if total_votes <= 0:
            return 100.0
        return margin / total_votes * 100

    @staticmethod
    def _decided(leader: str, previous_holder: str | None) -> DistrictRaceStatus:
        """確定時のラベル: 前回と同じ → HELD、異なる → GAINED、前回なし → ELECTED."""
        if not previous_holder:
            label = RaceStatus.ELECTED
        elif previous_holder == leader:
            label = RaceStatus.HELD
        else:
            label = RaceStatus.GAINED
        return DistrictRaceStatus(label, is_final=True, acting_identifier=leader)

    @staticmethod
    def candidate_status(
        status: DistrictRaceStatus,
        candidate_identifier: str | None,
        is_district_leader: bool,
    ) -> CandidateStatus:
        """選挙区の情勢から候補者単位の簡略状態を求める.

        Args:
            status: 選挙区の情勢判定結果
            candidate_identifier: 候補者のリスト識別子
            is_district_leader: 候補者が選挙区の得票1位か
        """
        if status.label is RaceStatus.AWAITING_DATA:
            return CandidateStatus.PROCESSING

        if status.acting_identifier is not None:
            if status.acting_identifier != candidate_identifier:
                return CandidateStatus.PROCESSING
            return (
                CandidateStatus.ELECTED if status.is_final else CandidateStatus.LEADING
            )

        if status.label is RaceStatus.TOO_CLOSE and is_district_leader:
            return CandidateStatus.LEADING
        return CandidateStatus.PROCESSING
