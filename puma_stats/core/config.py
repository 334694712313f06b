from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Puma Stats API"
    debug: bool = False

    control_url: str = "tcp://127.0.0.1:9293"
    control_token: str | None = None
    transport: Literal["http", "pumactl"] = "http"
    pumactl_bin: str = "pumactl"
    request_timeout: float = 5.0

    class Config:
        env_file = ".env"
        env_prefix = "PUMA_STATS_"


settings = Settings()
