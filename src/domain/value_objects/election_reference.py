"""選挙の静的参照データ（定数・前回結果）の値オブジェクト（Domain layer）.

参照データはグローバル状態として持たず、呼び出しごとに明示的に渡す。
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class DistrictReference:
    """小選挙区の参照データ."""

    district_id: str
    region: str
    registered_voters: int | None = None
    previous_holder: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class RegionReference:
    """比例地域（ブロック）の参照データ."""

    region: str
    proportional_seats: int
    previous_seats: Mapping[str, int] = field(default_factory=dict)
    previous_percentages: Mapping[str, float] = field(default_factory=dict)
    previous_votes: Mapping[str, int] = field(default_factory=dict)
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "previous_seats", MappingProxyType(dict(self.previous_seats))
        )
        object.__setattr__(
            self,
            "previous_percentages",
            MappingProxyType(dict(self.previous_percentages)),
        )
        object.__setattr__(
            self, "previous_votes", MappingProxyType(dict(self.previous_votes))
        )

    def previous_percent(self, identifier: str) -> float | None:
        """前回の得票率（%）. 得票率がなければ前回得票数から算出する."""
        if identifier in self.previous_percentages:
            return self.previous_percentages[identifier]
        total = sum(self.previous_votes.values())
        if total > 0 and identifier in self.previous_votes:
            return self.previous_votes[identifier] / total * 100
        return None


@dataclass(frozen=True)
class ElectionReference:
    """1回の選挙全体の参照データ."""

    regions: Mapping[str, RegionReference]
    districts: tuple[DistrictReference, ...]
    chamber_size: int
    barrier_percent: float = 5.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "regions", MappingProxyType(dict(self.regions)))
        object.__setattr__(self, "districts", tuple(self.districts))

    def district(self, district_id: str) -> DistrictReference | None:
        return next((d for d in self.districts if d.district_id == district_id), None)

    def districts_in_region(self, region: str) -> list[DistrictReference]:
        return [d for d in self.districts if d.region == region]
