"""Environment-based configuration via pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server and generation settings, configurable via BUILDING_* env vars."""

    model_config = {"env_prefix": "BUILDING_"}

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    max_triangles: int = 2_000_000

    # Mass and facade tasks evaluated in parallel
    max_workers: int = 4
    # Seconds before a build is abandoned
    build_timeout: float = 600.0
