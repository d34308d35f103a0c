"""小選挙区の候補者別得票から情勢判定の入力を組み立てるドメインサービス."""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from src.domain.services.tally_normalizer import TallyNormalizer
from src.domain.value_objects.district_race import DistrictRaceInput, RaceEntry
from src.domain.value_objects.election_reference import DistrictReference
from src.domain.value_objects.vote_tally import DataGap, DistrictVoteRecord


UNKNOWN_LIST_IDENTIFIER = "N/D"


@dataclass(frozen=True)
class DistrictRaceSnapshot:
    """1選挙区分の組み立て結果（得票順の候補者一覧を含む）."""

    race: DistrictRaceInput
    ranking: tuple[RaceEntry, ...]
    gaps: tuple[DataGap, ...] = ()


class DistrictRaceInputBuilder:
    """候補者別得票レコード → DistrictRaceInput."""

    def __init__(self, unknown_list_identifier: str = UNKNOWN_LIST_IDENTIFIER):
        self._unknown = unknown_list_identifier

    def build(
        self,
        district_id: str,
        records: Iterable[DistrictVoteRecord],
        reference: DistrictReference | None = None,
    ) -> DistrictRaceSnapshot:
        """1選挙区の得票レコードから情勢判定の入力を作る.

        候補者は得票降順（同数はリスト識別子 → 候補者名の昇順）に並べ、
        上位2名を1位・2位とする。残票見込みは 有権者数 - 開票数（下限0）。
        有権者数が不明な場合は残票0とみなす。
        """
        entries: list[RaceEntry] = []
        gaps: list[DataGap] = []
        for record in records:
            identifier = self.resolve_list_identifier(record)
            votes, reason = TallyNormalizer.parse_vote_count(record.vote_count)
            if reason is not None:
                gaps.append(DataGap(identifier, record.vote_count, reason))
            entries.append(RaceEntry(identifier, votes, record.candidate_name))

        ranking = tuple(
            sorted(entries, key=lambda e: (-e.votes, e.identifier, e.name or ""))
        )
        total_votes = sum(e.votes for e in ranking)
        registered = reference.registered_voters if reference else None

        race = DistrictRaceInput(
            leader=ranking[0] if ranking else None,
            runner_up=ranking[1] if len(ranking) > 1 else None,
            total_votes=total_votes,
            remaining_votes_estimate=self.estimate_remaining(registered, total_votes),
            previous_holder=reference.previous_holder if reference else None,
            district_id=district_id,
        )
        return DistrictRaceSnapshot(race, ranking, tuple(gaps))

    def resolve_list_identifier(self, record: DistrictVoteRecord) -> str:
        """候補者の所属リスト: 連合 → 政党 → 不明."""
        return record.list_identifier or record.party_identifier or self._unknown

    @staticmethod
    def estimate_remaining(registered_voters: int | None, total_votes: int) -> int:
        if not registered_voters:
            return 0
        return max(registered_voters - total_votes, 0)

    @staticmethod
    def group_by_district(
        records: Iterable[DistrictVoteRecord],
    ) -> dict[str, list[DistrictVoteRecord]]:
        grouped: dict[str, list[DistrictVoteRecord]] = defaultdict(list)
        for record in records:
            grouped[record.district_id].append(record)
        return dict(grouped)
