from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./diary.db"
    database_echo: bool = False
    auto_create_schema: bool = True

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    log_level: str = "INFO"
    log_file: Optional[str] = None

    cors_origins: List[str] = ["*"]

    # PDF export
    pdf_load_timeout_seconds: float = 30.0
    pdf_render_timeout_seconds: float = 30.0
    pdf_min_bytes: int = 1000
    pdf_page_format: str = "A4"
    pdf_margin: str = "20mm"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
