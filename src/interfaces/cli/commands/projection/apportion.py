"""ドント方式の議席配分コマンド."""

import click

from src.domain.services.proportional_apportionment_service import (
    ProportionalApportionmentService,
)
from src.domain.services.tally_normalizer import TallyNormalizer
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.base import BaseCommand, with_error_handling
from src.interfaces.cli.commands.projection.presenter import ProjectionPresenter


def _parse_vote_argument(argument: str) -> tuple[str, str]:
    identifier, sep, raw_votes = argument.partition("=")
    identifier = identifier.strip()
    if not sep or not identifier:
        raise click.BadParameter(
            f"'{argument}' は リスト=得票数 の形式で指定してください",
            param_hint="VOTES",
        )
    return identifier, raw_votes


@click.command()
@click.option("--seats", type=int, required=True, help="配分する議席数")
@click.option(
    "--barrier",
    type=float,
    default=None,
    help="阻止条項（%）。省略時は設定値 GISEKI_DEFAULT_BARRIER_PERCENT",
)
@click.argument("votes", nargs=-1, required=True)
@with_error_handling
def apportion(seats: int, barrier: float | None, votes: tuple[str, ...]):
    """リスト別得票から議席を配分する（例: A=100 B=80 C=30）."""
    barrier_percent = (
        barrier if barrier is not None else get_settings().default_barrier_percent
    )
    normalized = TallyNormalizer.normalize(_parse_vote_argument(v) for v in votes)
    for gap in normalized.gaps:
        BaseCommand.warning(
            f"{gap.identifier} の得票数 '{gap.raw_value}' を0として扱います "
            f"({gap.reason})"
        )

    result = ProportionalApportionmentService().apportion(
        normalized.tally, seats, barrier_percent
    )

    df = ProjectionPresenter.allocation_to_dataframe(normalized.tally, result)
    click.echo(f"=== ドント方式 議席配分 ({seats}議席, 阻止条項 {barrier_percent}%)")
    click.echo(df.to_string(index=False))
    if result.unallocated:
        BaseCommand.warning(f"未配分: {result.unallocated}議席")
