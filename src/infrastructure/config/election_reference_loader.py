"""選挙参照データ（JSON）の読み込み.

地域ごとの比例議席数・前回結果、選挙区の有権者数・前回保持リスト、
阻止条項、定数を検証してドメインの ElectionReference に変換する。

JSON形式:
    {
      "chamber_size": 213,
      "barrier_percent": 5,
      "regions": [
        {"region": "SP", "proportional_seats": 10,
         "previous_seats": {"UNI": 4}, "previous_percentages": {"UNI": 38.5}}
      ],
      "districts": [
        {"district_id": "101", "region": "SP",
         "registered_voters": 100000, "previous_holder": "UNI"}
      ]
    }
"""

import json

from pathlib import Path
from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import Field, ValidationError, field_validator, model_validator

from src.domain.exceptions import ReferenceDataError
from src.domain.value_objects.election_reference import (
    DistrictReference,
    ElectionReference,
    RegionReference,
)


class RegionReferenceModel(PydanticBaseModel):
    """比例地域の参照データモデル."""

    region: str = Field(min_length=1)
    name: str | None = None
    proportional_seats: int = Field(ge=0)
    previous_seats: dict[str, int] = Field(default_factory=dict)
    previous_percentages: dict[str, float] = Field(default_factory=dict)
    previous_votes: dict[str, int] = Field(default_factory=dict)

    @field_validator("previous_seats", "previous_votes")
    @classmethod
    def _non_negative(cls, value: dict[str, int]) -> dict[str, int]:
        negative = [k for k, v in value.items() if v < 0]
        if negative:
            raise ValueError(f"負の値があります: {', '.join(negative)}")
        return value


class DistrictReferenceModel(PydanticBaseModel):
    """小選挙区の参照データモデル."""

    district_id: str
    region: str
    name: str | None = None
    registered_voters: int | None = Field(default=None, ge=0)
    previous_holder: str | None = None

    @field_validator("district_id", "region", mode="before")
    @classmethod
    def _to_str(cls, value: Any) -> Any:
        # スプレッドシート由来のIDは数値で来ることがある
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("previous_holder")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is not None and value.strip() == "":
            return None
        return value


class ElectionReferenceModel(PydanticBaseModel):
    """選挙全体の参照データモデル."""

    chamber_size: int = Field(ge=0)
    barrier_percent: float = Field(default=5.0, ge=0)
    regions: list[RegionReferenceModel] = Field(default_factory=list)
    districts: list[DistrictReferenceModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_consistency(self) -> "ElectionReferenceModel":
        region_ids = [r.region for r in self.regions]
        if len(region_ids) != len(set(region_ids)):
            raise ValueError("地域が重複しています")
        district_ids = [d.district_id for d in self.districts]
        if len(district_ids) != len(set(district_ids)):
            raise ValueError("選挙区IDが重複しています")
        unknown = sorted({d.region for d in self.districts} - set(region_ids))
        if unknown:
            raise ValueError(f"未定義の地域を参照する選挙区があります: {unknown}")
        return self

    def to_domain(self) -> ElectionReference:
        return ElectionReference(
            regions={
                r.region: RegionReference(
                    region=r.region,
                    proportional_seats=r.proportional_seats,
                    previous_seats=r.previous_seats,
                    previous_percentages=r.previous_percentages,
                    previous_votes=r.previous_votes,
                    name=r.name,
                )
                for r in self.regions
            },
            districts=tuple(
                DistrictReference(
                    district_id=d.district_id,
                    region=d.region,
                    registered_voters=d.registered_voters,
                    previous_holder=d.previous_holder,
                    name=d.name,
                )
                for d in self.districts
            ),
            chamber_size=self.chamber_size,
            barrier_percent=self.barrier_percent,
        )


def parse_election_reference(data: dict[str, Any]) -> ElectionReference:
    """辞書から参照データを検証・変換する.

    Raises:
        ReferenceDataError: 検証に失敗した場合
    """
    try:
        model = ElectionReferenceModel.model_validate(data)
    except ValidationError as e:
        raise ReferenceDataError(
            "選挙参照データの検証に失敗しました",
            {"errors": e.error_count(), "detail": str(e)},
        ) from e
    return model.to_domain()


def load_election_reference(path: Path) -> ElectionReference:
    """JSONファイルから参照データを読み込む.

    Raises:
        ReferenceDataError: ファイルが読めない・JSONが不正・検証失敗の場合
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(
            f"選挙参照データを読み込めません: {path}", {"reason": str(e)}
        ) from e
    if not isinstance(data, dict):
        raise ReferenceDataError(f"選挙参照データの形式が不正です: {path}")
    return parse_election_reference(data)
