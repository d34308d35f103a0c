"""アプリケーション設定.

環境変数（接頭辞 GISEKI_）または .env ファイルから読み込む。
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file() -> Path | None:
    """カレントディレクトリから親方向に .env を探す."""
    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


class Settings(BaseSettings):
    """議席予測の設定."""

    model_config = SettingsConfigDict(
        env_prefix="GISEKI_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    json_logs: bool = False
    # 比例代表の阻止条項（%）。参照データで上書き可能
    default_barrier_percent: float = Field(default=5.0, ge=0)
    # 「接戦」とみなす票差（開票数に対する%）
    too_close_margin_percent: float = Field(default=1.0, ge=0)
    # 所属リスト不明の候補者に割り当てる識別子
    unknown_list_identifier: str = "N/D"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """設定を取得する（キャッシュ済み）."""
    return Settings()


def reload_settings() -> Settings:
    """キャッシュを破棄して設定を再読み込みする."""
    get_settings.cache_clear()
    return get_settings()
