"""Application configuration loaded from environment variables."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Agent invocation service
    agent_api_base_url: str = "http://localhost:8000/api"
    agent_api_key: str = ""

    # Scheduler service
    scheduler_api_base_url: str = "http://localhost:8000/api/scheduler"
    scheduler_api_key: str = ""

    # Fixed agent / schedule identifiers
    manager_agent_id: str = "69996933e3502b03b1c6e0b1"
    visual_agent_id: str = "69996934deebc613f158666b"
    schedule_id: str = "6999693e399dfadeac37e371"

    # None = wait for the remote call to resolve on its own
    http_timeout_sec: Optional[float] = None

    # Local key-value persistence
    data_dir: str = "./data"

    # UI timings
    busy_release_delay_sec: float = 1.5
    schedule_log_limit: int = 20

    # Comma-separated extra CORS origins
    allowed_origins: str = ""


settings = Settings()
