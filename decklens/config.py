from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckLens"
    debug: bool = False

    # Trimmed dataset produced by `python -m decklens.jobs.trim_cards`.
    # Relative paths resolve against the working directory.
    card_index_path: Path = Path("data/mtgjson/atomic-trimmed.json")

    mtgjson_base_url: str = "https://mtgjson.com/api/v5"
    mtgjson_data_dir: Path = Path("data/mtgjson")


settings = Settings()
