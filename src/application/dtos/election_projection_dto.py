"""開票スナップショットからの議席予測用DTO."""

from dataclasses import dataclass, field

from src.domain.value_objects.district_race import (
    DistrictRaceInput,
    DistrictRaceStatus,
    RaceEntry,
)
from src.domain.value_objects.election_reference import ElectionReference
from src.domain.value_objects.national_seat_totals import (
    NationalSeatTotals,
    ProportionalSwingEntry,
    SeatChangeSummary,
)
from src.domain.value_objects.seat_allocation import SeatAllocationResult
from src.domain.value_objects.vote_tally import (
    DataGap,
    DistrictVoteRecord,
    Tally,
    VoteRecord,
)


@dataclass
class ProjectElectionResultsInputDto:
    """議席予測の入力DTO."""

    reference: ElectionReference
    proportional_records: list[VoteRecord] = field(default_factory=list)
    district_records: list[DistrictVoteRecord] = field(default_factory=list)
    barrier_percent: float | None = None


@dataclass
class DistrictResultItem:
    """1選挙区分の判定結果."""

    district_id: str
    region: str | None
    race: DistrictRaceInput
    status: DistrictRaceStatus
    ranking: tuple[RaceEntry, ...] = ()


@dataclass
class ProjectElectionResultsOutputDto:
    """議席予測の出力DTO."""

    region_tallies: dict[str, Tally] = field(default_factory=dict)
    region_allocations: dict[str, SeatAllocationResult] = field(default_factory=dict)
    district_results: dict[str, DistrictResultItem] = field(default_factory=dict)
    region_chambers: dict[str, dict[str, int]] = field(default_factory=dict)
    national_totals: NationalSeatTotals | None = None
    seat_changes: dict[str, SeatChangeSummary] = field(default_factory=dict)
    national_swing: list[ProportionalSwingEntry] = field(default_factory=list)
    region_swings: dict[str, list[ProportionalSwingEntry]] = field(
        default_factory=dict
    )
    data_gaps: list[DataGap] = field(default_factory=list)
    skipped_regions: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def decided_districts(self) -> int:
        return sum(1 for item in self.district_results.values() if item.status.is_final)
