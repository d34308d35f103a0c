"""giseki CLI エントリーポイント."""

import click

from src.common.logging import setup_logging
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.commands.projection import apportion, project


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="ログレベル（省略時は GISEKI_LOG_LEVEL）",
)
def cli(log_level: str | None):
    """ドント方式の議席配分と開票速報の議席予測."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.json_logs)


cli.add_command(apportion)
cli.add_command(project)


if __name__ == "__main__":
    cli()
