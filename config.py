import json
from functools import lru_cache
from pathlib import Path

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings

from schemas.rules import RuleConfig

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    app_name: str = "SpotCheck Loan Portal API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./spotcheck.db"
    cors_origins: str = "http://localhost:5173,https://spot-check.site,https://www.spot-check.site"

    # Eligibility rule table, loaded once at startup
    rules_path: str = str(BASE_DIR / "rules.json")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _is_sqlite: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme = self.database_url.split(":")[0].lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite


settings = Settings()


def load_rules(path: str | Path) -> RuleConfig:
    """Read the eligibility rule table from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        return RuleConfig.model_validate(json.load(fh))


@lru_cache(maxsize=1)
def get_rules() -> RuleConfig:
    """Rule table for the process lifetime. Also usable as a FastAPI dependency."""
    return load_rules(settings.rules_path)
