"""比例代表の議席配分結果の値オブジェクト（Domain layer）."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class SeatAllocationResult:
    """1地域（ブロック）分の議席配分結果.

    不変条件: sum(seats) + unallocated == total_seats
    """

    seats: Mapping[str, int]
    total_seats: int
    unallocated: int
    region: str | None = None
    excluded: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "seats", MappingProxyType(dict(self.seats)))
        object.__setattr__(self, "excluded", frozenset(self.excluded))

    @property
    def allocated(self) -> int:
        """配分済み議席数."""
        return sum(self.seats.values())

    def seats_for(self, identifier: str) -> int:
        """指定リストの獲得議席数（未登場なら0）."""
        return self.seats.get(identifier, 0)

    def winners(self) -> dict[str, int]:
        """1議席以上を獲得したリストのみを議席数降順で返す."""
        return dict(
            sorted(
                ((k, v) for k, v in self.seats.items() if v > 0),
                key=lambda item: (-item[1], item[0]),
            )
        )
