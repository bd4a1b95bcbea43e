from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LOCKERSYS_", env_file=".env", extra="ignore")

    database_url: str = "sqlite+pysqlite:///./lockersys.db"
    echo_sql: bool = False

    token_ttl_hours: int = 24 * 7

    admin_name: str = "Admin User"
    admin_email: str = "admin@lockers.com"
    admin_password: str = "admin123"

    seed_sample_data: bool = False
    seed_data_path: Path = Path(__file__).resolve().parent / "seed_data.yaml"

    cors_origins: list[str] = ["http://localhost:5173"]
    log_level: str = "INFO"

