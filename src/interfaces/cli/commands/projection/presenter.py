"""議席配分・議席予測結果の表示用変換."""

from typing import Any

import pandas as pd

from src.application.dtos.election_projection_dto import (
    ProjectElectionResultsOutputDto,
)
from src.domain.services.district_race_classifier import DistrictRaceClassifier
from src.domain.value_objects.national_seat_totals import (
    CoalitionSeats,
    ProportionalSwingEntry,
)
from src.domain.value_objects.seat_allocation import SeatAllocationResult
from src.domain.value_objects.vote_tally import Tally


class ProjectionPresenter:
    """議席計算結果をDataFrame・辞書に変換する."""

    @staticmethod
    def allocation_to_dataframe(
        tally: Tally, allocation: SeatAllocationResult
    ) -> pd.DataFrame:
        """リスト別の得票・議席（議席降順、同数は得票降順）."""
        df_data = []
        for identifier, votes in tally.items():
            df_data.append(
                {
                    "リスト": identifier,
                    "得票数": votes,
                    "得票率": round(tally.share_percent(identifier), 2),
                    "議席": allocation.seats_for(identifier),
                    "阻止条項": "除外" if identifier in allocation.excluded else "",
                }
            )
        df = pd.DataFrame(
            df_data, columns=["リスト", "得票数", "得票率", "議席", "阻止条項"]
        )
        return df.sort_values(
            by=["議席", "得票数", "リスト"], ascending=[False, False, True]
        ).reset_index(drop=True)

    @staticmethod
    def totals_to_dataframe(output: ProjectElectionResultsOutputDto) -> pd.DataFrame:
        """全国のリスト別議席（比例・小選挙区・合計）."""
        totals = output.national_totals
        if totals is None:
            return pd.DataFrame(columns=["リスト", "比例", "小選挙区", "合計"])
        df_data = [
            {
                "リスト": identifier,
                "比例": totals.proportional_seats.get(identifier, 0),
                "小選挙区": totals.district_seats.get(identifier, 0),
                "合計": seats,
            }
            for identifier, seats in totals.ranked()
            if seats > 0
        ]
        return pd.DataFrame(df_data, columns=["リスト", "比例", "小選挙区", "合計"])

    @staticmethod
    def regions_to_dataframe(output: ProjectElectionResultsOutputDto) -> pd.DataFrame:
        """地域別の比例配分と地域構成."""
        df_data = []
        for region, allocation in sorted(output.region_allocations.items()):
            chamber = output.region_chambers.get(region, {})
            df_data.append(
                {
                    "地域": region,
                    "比例定数": allocation.total_seats,
                    "比例配分": ", ".join(
                        f"{k}:{v}" for k, v in allocation.winners().items()
                    ),
                    "未配分": allocation.unallocated,
                    "地域構成": ", ".join(f"{k}:{v}" for k, v in chamber.items()),
                }
            )
        return pd.DataFrame(
            df_data, columns=["地域", "比例定数", "比例配分", "未配分", "地域構成"]
        )

    @staticmethod
    def seat_changes_to_dataframe(
        output: ProjectElectionResultsOutputDto,
    ) -> pd.DataFrame:
        """小選挙区の前回比（維持・獲得・喪失）."""
        df_data = [
            {
                "リスト": identifier,
                "維持": change.held,
                "獲得": change.gained,
                "喪失": change.lost,
                "増減": change.net,
            }
            for identifier, change in output.seat_changes.items()
        ]
        return pd.DataFrame(
            df_data, columns=["リスト", "維持", "獲得", "喪失", "増減"]
        )

    @staticmethod
    def districts_to_dataframe(output: ProjectElectionResultsOutputDto) -> pd.DataFrame:
        """選挙区別の情勢."""
        df_data = []
        for district_id, item in sorted(output.district_results.items()):
            leader = item.race.leader
            df_data.append(
                {
                    "選挙区": district_id,
                    "地域": item.region or "",
                    "情勢": item.status.label.value,
                    "確定": "○" if item.status.is_final else "",
                    "リスト": item.status.acting_identifier or "",
                    "1位": leader.name or leader.identifier if leader else "",
                    "票差": item.race.margin if item.race.margin is not None else "",
                }
            )
        return pd.DataFrame(
            df_data,
            columns=["選挙区", "地域", "情勢", "確定", "リスト", "1位", "票差"],
        )

    @staticmethod
    def to_dict(
        output: ProjectElectionResultsOutputDto,
        coalitions: list[CoalitionSeats] | None = None,
    ) -> dict[str, Any]:
        """JSON出力用の辞書."""
        totals = output.national_totals
        return {
            "national": {
                "seats": dict(totals.ranked()) if totals else {},
                "proportional_seats": dict(totals.proportional_seats)
                if totals
                else {},
                "district_seats": dict(totals.district_seats) if totals else {},
                "total": totals.total if totals else 0,
                "expected_total": totals.expected_total if totals else 0,
                "majority_threshold": totals.majority_threshold if totals else 0,
            },
            "regions": {
                region: {
                    "votes": dict(output.region_tallies.get(region, Tally())),
                    "seats": allocation.winners(),
                    "unallocated": allocation.unallocated,
                    "excluded": sorted(allocation.excluded),
                    "chamber": output.region_chambers.get(region, {}),
                    "swing": [
                        ProjectionPresenter._swing_to_dict(entry)
                        for entry in output.region_swings.get(region, [])
                    ],
                }
                for region, allocation in output.region_allocations.items()
            },
            "districts": {
                district_id: {
                    "region": item.region,
                    "status": item.status.label.value,
                    "is_final": item.status.is_final,
                    "acting_identifier": item.status.acting_identifier,
                    "margin": item.race.margin,
                    "total_votes": item.race.total_votes,
                    "remaining_votes_estimate": item.race.remaining_votes_estimate,
                    "candidates": [
                        {
                            "name": entry.name,
                            "list_identifier": entry.identifier,
                            "votes": entry.votes,
                            "status": DistrictRaceClassifier.candidate_status(
                                item.status, entry.identifier, rank == 0
                            ).value,
                        }
                        for rank, entry in enumerate(item.ranking)
                    ],
                }
                for district_id, item in sorted(output.district_results.items())
            },
            "seat_changes": {
                identifier: {
                    "held": change.held,
                    "gained": change.gained,
                    "lost": change.lost,
                    "net": change.net,
                }
                for identifier, change in output.seat_changes.items()
            },
            "proportional_swing": [
                ProjectionPresenter._swing_to_dict(entry)
                for entry in output.national_swing
            ],
            "coalitions": [
                {
                    "members": list(c.members),
                    "seats": c.seats,
                    "has_majority": c.has_majority,
                }
                for c in coalitions or []
            ],
            "data_gaps": [
                {
                    "identifier": gap.identifier,
                    "raw_value": str(gap.raw_value),
                    "reason": gap.reason,
                }
                for gap in output.data_gaps
            ],
            "skipped_regions": list(output.skipped_regions),
            "warnings": list(output.warnings),
        }

    @staticmethod
    def _swing_to_dict(entry: ProportionalSwingEntry) -> dict[str, Any]:
        return {
            "list_identifier": entry.identifier,
            "current_percent": round(entry.current_percent, 3),
            "previous_percent": round(entry.previous_percent, 3),
            "swing": round(entry.swing, 3),
            "current_seats": entry.current_seats,
            "previous_seats": entry.previous_seats,
        }
