"""全国集計の値オブジェクト（Domain layer）."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class ConsistencyWarning:
    """議席合計が定数と一致しないことを示す警告（例外ではない）."""

    expected_total: int
    actual_total: int

    @property
    def difference(self) -> int:
        """合計 - 定数（開票途中は負になる）."""
        return self.actual_total - self.expected_total

    @property
    def message(self) -> str:
        return (
            f"議席合計 {self.actual_total} が定数 {self.expected_total} と一致しません"
        )


@dataclass(frozen=True)
class NationalSeatTotals:
    """リスト別の全国議席合計（比例 + 確定した小選挙区）."""

    seats: Mapping[str, int]
    expected_total: int
    proportional_seats: Mapping[str, int] = field(default_factory=dict)
    district_seats: Mapping[str, int] = field(default_factory=dict)
    warning: ConsistencyWarning | None = None

    def __post_init__(self) -> None:
        for name in ("seats", "proportional_seats", "district_seats"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def total(self) -> int:
        return sum(self.seats.values())

    @property
    def majority_threshold(self) -> int:
        """過半数ライン（定数/2の切り捨て + 1）."""
        return self.expected_total // 2 + 1

    def ranked(self) -> list[tuple[str, int]]:
        """議席数降順（同数は識別子順）のリスト."""
        return sorted(self.seats.items(), key=lambda item: (-item[1], item[0]))


@dataclass(frozen=True)
class CoalitionSeats:
    """連立（複数リストの組み合わせ）の議席合計."""

    members: tuple[str, ...]
    seats: int
    majority_threshold: int

    @property
    def has_majority(self) -> bool:
        return self.seats >= self.majority_threshold


@dataclass
class SeatChangeSummary:
    """前回選挙からの小選挙区議席の増減（リスト単位）."""

    held: int = 0
    gained: int = 0
    lost: int = 0

    @property
    def net(self) -> int:
        return self.gained - self.lost


@dataclass(frozen=True)
class ProportionalSwingEntry:
    """比例得票率・議席の前回比較."""

    identifier: str
    current_percent: float
    previous_percent: float
    current_seats: int = 0
    previous_seats: int = 0
    region: str | None = None

    @property
    def swing(self) -> float:
        """得票率の変化（ポイント）."""
        return self.current_percent - self.previous_percent

    @property
    def seat_change(self) -> int:
        return self.current_seats - self.previous_seats
