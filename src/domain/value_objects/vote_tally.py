"""得票データの値オブジェクト（Domain layer）."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.domain.exceptions import InvalidArgumentException


@dataclass(frozen=True)
class VoteRecord:
    """比例代表の得票レコード（外部データソースの1行）.

    vote_count は未加工の値（数値・"1.234,5" 形式の文字列・欠損）をそのまま保持する。
    """

    region: str
    list_identifier: str
    vote_count: object


@dataclass(frozen=True)
class DistrictVoteRecord:
    """小選挙区の候補者別得票レコード."""

    district_id: str
    candidate_name: str
    list_identifier: str | None
    vote_count: object
    party_identifier: str | None = None


@dataclass(frozen=True)
class DataGap:
    """解釈できなかった得票値（0として扱われた）."""

    identifier: str
    raw_value: object
    reason: str


@dataclass(frozen=True)
class Tally(Mapping[str, int]):
    """識別子→得票数（非負整数）の不変マッピング.

    生成時に負の得票数を拒否する。計算の各段階は新しいTallyを生成し、
    既存のTallyを書き換えることはない。
    """

    _counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        counts: dict[str, int] = {}
        for identifier, votes in self._counts.items():
            if isinstance(votes, bool) or not isinstance(votes, int):
                raise InvalidArgumentException(
                    "votes", votes, f"{identifier} の得票数が整数ではありません"
                )
            if votes < 0:
                raise InvalidArgumentException(
                    "votes", votes, f"{identifier} の得票数が負の値です"
                )
            counts[identifier] = votes
        object.__setattr__(self, "_counts", MappingProxyType(counts))

    def __getitem__(self, identifier: str) -> int:
        return self._counts[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __hash__(self) -> int:
        return hash(frozenset(self._counts.items()))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._counts) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Tally({dict(self._counts)!r})"

    @property
    def total(self) -> int:
        """全識別子の得票合計."""
        return sum(self._counts.values())

    def share_percent(self, identifier: str) -> float:
        """得票率（%）. 合計0の場合は0.0."""
        total = self.total
        if total == 0:
            return 0.0
        return self._counts.get(identifier, 0) / total * 100

    def merged(self, other: Mapping[str, int]) -> "Tally":
        """他の集計と合算した新しいTallyを返す."""
        counts = dict(self._counts)
        for identifier, votes in other.items():
            counts[identifier] = counts.get(identifier, 0) + votes
        return Tally(counts)


@dataclass(frozen=True)
class NormalizedTally:
    """正規化結果（集計と、0として補完した欠損値の一覧）."""

    tally: Tally
    gaps: tuple[DataGap, ...] = ()

    @property
    def has_gaps(self) -> bool:
        return bool(self.gaps)
