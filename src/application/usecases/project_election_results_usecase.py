"""開票スナップショットから議席を予測するユースケース.

処理フロー:
    1. 比例得票を地域ごとに正規化（欠損値は0として補完し件数を記録）
    2. 参照データの議席数・阻止条項で地域ごとにドント方式で配分
    3. 小選挙区ごとに上位2候補・残票見込みを組み立てて情勢を判定
    4. 比例配分と確定選挙区を全国・地域別に集計し、定数との差を警告
    5. 前回比（小選挙区の議席増減、比例のスイング）を算出

スナップショットごとに毎回すべてを再計算する。前回の結果は保持しない。
"""

from src.application.dtos.election_projection_dto import (
    DistrictResultItem,
    ProjectElectionResultsInputDto,
    ProjectElectionResultsOutputDto,
)
from src.common.logging import get_logger
from src.domain.services.district_race_classifier import DistrictRaceClassifier
from src.domain.services.district_race_input_builder import DistrictRaceInputBuilder
from src.domain.services.proportional_apportionment_service import (
    ProportionalApportionmentService,
)
from src.domain.services.proportional_swing_service import ProportionalSwingService
from src.domain.services.seat_aggregation_service import SeatAggregationService
from src.domain.services.tally_normalizer import TallyNormalizer
from src.domain.value_objects.district_race import DistrictRaceStatus
from src.domain.value_objects.vote_tally import Tally


class ProjectElectionResultsUseCase:
    """開票スナップショットからの議席予測ユースケース."""

    def __init__(
        self,
        apportionment_service: ProportionalApportionmentService | None = None,
        race_classifier: DistrictRaceClassifier | None = None,
        race_input_builder: DistrictRaceInputBuilder | None = None,
    ) -> None:
        self._apportionment = (
            apportionment_service or ProportionalApportionmentService()
        )
        self._classifier = race_classifier or DistrictRaceClassifier()
        self._builder = race_input_builder or DistrictRaceInputBuilder()
        self._logger = get_logger(self.__class__.__name__)

    def execute(
        self, input_dto: ProjectElectionResultsInputDto
    ) -> ProjectElectionResultsOutputDto:
        """議席予測を実行する.

        Raises:
            InvalidArgumentException: 参照データの議席数・阻止条項が負の場合
        """
        reference = input_dto.reference
        barrier = (
            input_dto.barrier_percent
            if input_dto.barrier_percent is not None
            else reference.barrier_percent
        )
        output = ProjectElectionResultsOutputDto()

        # 1-2. 比例代表
        normalized = TallyNormalizer.normalize_by_region(input_dto.proportional_records)
        for region, result in normalized.items():
            output.data_gaps.extend(result.gaps)
            if region not in reference.regions:
                self._logger.warning("参照データにない地域をスキップ", region=region)
                output.skipped_regions.append(region)

        for region, region_ref in reference.regions.items():
            tally = normalized[region].tally if region in normalized else Tally()
            output.region_tallies[region] = tally
            output.region_allocations[region] = self._apportionment.apportion(
                tally, region_ref.proportional_seats, barrier, region=region
            )

        # 3. 小選挙区
        grouped = DistrictRaceInputBuilder.group_by_district(input_dto.district_records)
        district_ids = [d.district_id for d in reference.districts]
        known = set(district_ids)
        district_ids += [d for d in grouped if d not in known]
        for district_id in district_ids:
            district_ref = reference.district(district_id)
            snapshot = self._builder.build(
                district_id, grouped.get(district_id, []), district_ref
            )
            output.data_gaps.extend(snapshot.gaps)
            output.district_results[district_id] = DistrictResultItem(
                district_id=district_id,
                region=district_ref.region if district_ref else None,
                race=snapshot.race,
                status=self._classifier.classify(snapshot.race),
                ranking=snapshot.ranking,
            )

        # 4. 全国集計
        statuses: dict[str, DistrictRaceStatus] = {
            district_id: item.status
            for district_id, item in output.district_results.items()
        }
        winners = SeatAggregationService.decided_winners(statuses)
        totals = SeatAggregationService.aggregate(
            output.region_allocations.values(),
            winners,
            reference.chamber_size,
        )
        for region, allocation in output.region_allocations.items():
            output.region_chambers[region] = SeatAggregationService.region_chamber(
                allocation,
                [
                    winners[d.district_id]
                    for d in reference.districts_in_region(region)
                    if d.district_id in winners
                ],
            )
        output.national_totals = totals
        if totals.warning is not None:
            self._logger.warning(
                "議席合計が定数と一致しません",
                expected=totals.warning.expected_total,
                actual=totals.warning.actual_total,
            )
            output.warnings.append(totals.warning.message)

        # 5. 前回比
        output.seat_changes = SeatAggregationService.seat_changes(
            statuses,
            {d.district_id: d.previous_holder for d in reference.districts},
        )
        output.national_swing = ProportionalSwingService.national_swing(
            output.region_tallies, reference.regions, output.region_allocations
        )
        for region, region_ref in reference.regions.items():
            output.region_swings[region] = ProportionalSwingService.region_swing(
                output.region_tallies[region],
                region_ref,
                output.region_allocations[region],
            )

        if output.data_gaps:
            self._logger.info("欠損値を0として補完", count=len(output.data_gaps))

        self._logger.info(
            "議席予測完了",
            regions=len(output.region_allocations),
            districts=len(output.district_results),
            decided=output.decided_districts,
            total_seats=totals.total,
        )
        return output
