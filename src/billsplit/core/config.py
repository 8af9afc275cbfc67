from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    app_name: str = "Bill Splitter API"
    app_version: str = "1.0.0"
    debug: bool = False

    # API settings
    api_v1_str: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS settings
    backend_cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8501",  # Streamlit default port
        "http://127.0.0.1:8501",
    ]
    allowed_hosts: List[str] = ["localhost", "127.0.0.1", "0.0.0.0"]

    # Logging
    log_file: str = "billsplit.log"
    log_rotation: str = "1 MB"
    log_level: str = "DEBUG"

    class Config:
        env_file = ".env"
        # Frontend variables such as BACKEND_URL share the same .env
        extra = "ignore"


settings = Settings()
