"""Configuration settings for the content inventory."""

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Storage Configuration
    public_dir: Path = BASE_DIR / "public"
    data_dir: Path = BASE_DIR / "public" / "data"

    # Console Configuration
    api_url: str = "http://localhost:3000"

    # CORS for the Streamlit console and local front-end dev servers
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8501",
        "http://localhost:5173",
    ]

    # Tracing Configuration
    tracing_enabled: bool = True
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
