"""議席配分・議席予測 CLI コマンド."""

from src.interfaces.cli.commands.projection.apportion import apportion
from src.interfaces.cli.commands.projection.project import project


__all__ = ["apportion", "project"]
