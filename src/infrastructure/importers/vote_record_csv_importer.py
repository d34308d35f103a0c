"""開票スナップショットCSVの読み込み.

比例代表・小選挙区の得票CSVを読み込み、ドメインの得票レコードに変換する。
セル値は数値変換せず文字列のまま渡し、正規化はドメイン側で行う。

比例代表CSVの列:
    region, list_identifier, votes
    （別名: uf, parl_front_legend, proportional_votes_qtn）

小選挙区CSVの列:
    district_id, candidate_name, list_identifier, party_identifier, votes
    （別名: parl_front_legend, party_legend, votes_qtn）
"""

import logging

from pathlib import Path

import pandas as pd

from src.domain.value_objects.vote_tally import DistrictVoteRecord, VoteRecord


logger = logging.getLogger(__name__)

_PROPORTIONAL_ALIASES: dict[str, str] = {
    "uf": "region",
    "parl_front_legend": "list_identifier",
    "proportional_votes_qtn": "votes",
}

_DISTRICT_ALIASES: dict[str, str] = {
    "parl_front_legend": "list_identifier",
    "party_legend": "party_identifier",
    "votes_qtn": "votes",
}

_PROPORTIONAL_REQUIRED = ("region", "list_identifier", "votes")
_DISTRICT_REQUIRED = ("district_id", "candidate_name", "votes")


class SnapshotFormatError(ValueError):
    """CSVに必須列がない."""


def _read_csv(path: Path, aliases: dict[str, str]) -> pd.DataFrame:
    """全セルを文字列として読み込み、列名を正規化する."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {k: v for k, v in aliases.items() if k in df.columns and v not in df}
    return df.rename(columns=renames)


def _require(df: pd.DataFrame, columns: tuple[str, ...], path: Path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SnapshotFormatError(f"{path.name}: 必須列がありません: {missing}")


def _clean(value: object) -> str:
    return "" if value is None else str(value).strip()


def read_proportional_records(path: Path) -> list[VoteRecord]:
    """比例代表の得票CSVを読み込む.

    地域またはリスト識別子が空の行は除外する。
    """
    df = _read_csv(path, _PROPORTIONAL_ALIASES)
    _require(df, _PROPORTIONAL_REQUIRED, path)

    records: list[VoteRecord] = []
    skipped = 0
    for row in df.itertuples(index=False):
        region = _clean(row.region)
        identifier = _clean(row.list_identifier)
        if not region or not identifier:
            skipped += 1
            continue
        records.append(VoteRecord(region, identifier, row.votes))

    if skipped:
        logger.info("比例得票CSV: 地域・リスト未設定の %d 行を除外", skipped)
    logger.debug("比例得票CSV: %d 行を読み込み (%s)", len(records), path)
    return records


def read_district_records(path: Path) -> list[DistrictVoteRecord]:
    """小選挙区の得票CSVを読み込む.

    選挙区IDまたは候補者名が空の行は除外する。
    """
    df = _read_csv(path, _DISTRICT_ALIASES)
    _require(df, _DISTRICT_REQUIRED, path)
    has_list = "list_identifier" in df.columns
    has_party = "party_identifier" in df.columns

    records: list[DistrictVoteRecord] = []
    skipped = 0
    for row in df.to_dict(orient="records"):
        district_id = _clean(row["district_id"])
        candidate_name = _clean(row["candidate_name"])
        if not district_id or not candidate_name:
            skipped += 1
            continue
        records.append(
            DistrictVoteRecord(
                district_id=district_id,
                candidate_name=candidate_name,
                list_identifier=_clean(row["list_identifier"]) or None
                if has_list
                else None,
                vote_count=row["votes"],
                party_identifier=_clean(row["party_identifier"]) or None
                if has_party
                else None,
            )
        )

    if skipped:
        logger.info("小選挙区得票CSV: 選挙区・候補者未設定の %d 行を除外", skipped)
    logger.debug("小選挙区得票CSV: %d 行を読み込み (%s)", len(records), path)
    return records
