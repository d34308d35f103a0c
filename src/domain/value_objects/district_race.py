"""小選挙区の情勢判定に関する値オブジェクト（Domain layer）."""

from dataclasses import dataclass
from enum import Enum


class RaceStatus(Enum):
    """小選挙区の情勢ラベル."""

    AWAITING_DATA = "awaiting_data"
    LEADING = "leading"
    TOO_CLOSE = "too_close"
    CONTESTED = "contested"
    HELD = "held"
    GAINED = "gained"
    ELECTED = "elected"

    @property
    def is_decided(self) -> bool:
        """当選確定系のラベルか."""
        return self in (RaceStatus.HELD, RaceStatus.GAINED, RaceStatus.ELECTED)


class CandidateStatus(Enum):
    """候補者カード向けの簡略化された状態."""

    ELECTED = "elected"
    LEADING = "leading"
    PROCESSING = "processing"


@dataclass(frozen=True)
class RaceEntry:
    """小選挙区の上位候補（リスト識別子・得票数・候補者名）."""

    identifier: str
    votes: int
    name: str | None = None


@dataclass(frozen=True)
class DistrictRaceInput:
    """情勢判定の入力（ある時点の開票スナップショット）."""

    leader: RaceEntry | None
    runner_up: RaceEntry | None
    total_votes: int
    remaining_votes_estimate: int
    previous_holder: str | None = None
    district_id: str | None = None

    @property
    def margin(self) -> int | None:
        """1位と2位の票差（2位がいなければNone）."""
        if self.leader is None or self.runner_up is None:
            return None
        return self.leader.votes - self.runner_up.votes

    @property
    def is_misordered(self) -> bool:
        """1位として渡された候補が2位より少ない得票か."""
        margin = self.margin
        return margin is not None and margin < 0


@dataclass(frozen=True)
class DistrictRaceStatus:
    """情勢判定の結果.

    表示色などは含まず、抽象的なラベルと対象リストのみを保持する。
    """

    label: RaceStatus
    is_final: bool
    acting_identifier: str | None = None
