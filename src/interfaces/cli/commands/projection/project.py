"""開票スナップショットからの議席予測コマンド."""

import json

from pathlib import Path

import click

from src.application.dtos.election_projection_dto import (
    ProjectElectionResultsInputDto,
)
from src.application.usecases.project_election_results_usecase import (
    ProjectElectionResultsUseCase,
)
from src.domain.services.district_race_classifier import DistrictRaceClassifier
from src.domain.services.district_race_input_builder import DistrictRaceInputBuilder
from src.domain.services.seat_aggregation_service import SeatAggregationService
from src.infrastructure.config.election_reference_loader import (
    load_election_reference,
)
from src.infrastructure.config.settings import get_settings
from src.infrastructure.importers.vote_record_csv_importer import (
    read_district_records,
    read_proportional_records,
)
from src.interfaces.cli.base import BaseCommand, with_error_handling
from src.interfaces.cli.commands.projection.presenter import ProjectionPresenter


_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command()
@click.option(
    "--reference",
    "reference_path",
    type=_PATH,
    required=True,
    help="選挙参照データ（JSON）",
)
@click.option(
    "--proportional",
    "proportional_path",
    type=_PATH,
    default=None,
    help="比例代表の得票CSV",
)
@click.option(
    "--districts",
    "districts_path",
    type=_PATH,
    default=None,
    help="小選挙区の得票CSV",
)
@click.option(
    "--barrier",
    type=float,
    default=None,
    help="阻止条項（%）。省略時は参照データの値",
)
@click.option(
    "--coalition",
    "coalitions",
    multiple=True,
    help="議席を合算するリストの組み合わせ（例: A,B）。複数指定可",
)
@click.option("--json", "as_json", is_flag=True, help="JSON形式で出力")
@with_error_handling
def project(
    reference_path: Path,
    proportional_path: Path | None,
    districts_path: Path | None,
    barrier: float | None,
    coalitions: tuple[str, ...],
    as_json: bool,
):
    """開票スナップショットから全国の議席を予測する."""
    settings = get_settings()
    reference = load_election_reference(reference_path)
    input_dto = ProjectElectionResultsInputDto(
        reference=reference,
        proportional_records=read_proportional_records(proportional_path)
        if proportional_path
        else [],
        district_records=read_district_records(districts_path)
        if districts_path
        else [],
        barrier_percent=barrier,
    )

    usecase = ProjectElectionResultsUseCase(
        race_classifier=DistrictRaceClassifier(settings.too_close_margin_percent),
        race_input_builder=DistrictRaceInputBuilder(
            settings.unknown_list_identifier
        ),
    )
    output = usecase.execute(input_dto)

    coalition_results = []
    if output.national_totals is not None:
        for raw in coalitions:
            members = [m.strip() for m in raw.split(",") if m.strip()]
            if members:
                coalition_results.append(
                    SeatAggregationService.coalition(output.national_totals, members)
                )

    if as_json:
        data = ProjectionPresenter.to_dict(output, coalition_results)
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    totals = output.national_totals
    click.echo("=== 全国議席 ===")
    click.echo(ProjectionPresenter.totals_to_dataframe(output).to_string(index=False))
    if totals is not None:
        click.echo(
            f"  合計: {totals.total} / 定数 {totals.expected_total}"
            f"（過半数 {totals.majority_threshold}）"
        )

    if output.region_allocations:
        click.echo("\n=== 地域別 ===")
        click.echo(
            ProjectionPresenter.regions_to_dataframe(output).to_string(index=False)
        )

    if output.district_results:
        click.echo(
            f"\n=== 小選挙区 ({output.decided_districts}/"
            f"{len(output.district_results)} 確定) ==="
        )
        click.echo(
            ProjectionPresenter.districts_to_dataframe(output).to_string(index=False)
        )

    if output.seat_changes:
        click.echo("\n=== 小選挙区 前回比 ===")
        click.echo(
            ProjectionPresenter.seat_changes_to_dataframe(output).to_string(
                index=False
            )
        )

    for coalition in coalition_results:
        mark = "過半数" if coalition.has_majority else "過半数未満"
        label = "+".join(coalition.members)
        click.echo(f"\n連立 {label}: {coalition.seats}議席 ({mark})")

    if output.data_gaps:
        BaseCommand.warning(f"欠損値 {len(output.data_gaps)} 件を0として扱いました")
    for region in output.skipped_regions:
        BaseCommand.warning(f"参照データにない地域をスキップしました: {region}")
    for message in output.warnings:
        BaseCommand.warning(message)
