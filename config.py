"""
Configuración central de FinNews Monitor.
Usa pydantic-settings para tipado y validación de variables de entorno.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- App ---
    APP_NAME: str = "FinNews Monitor"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # --- Fuentes ---
    # Orden de concatenación de resultados
    ENABLED_SOURCES: list[str] = ["baidu", "tushare"]

    TUSHARE_TOKEN: str = ""
    TUSHARE_API_URL: str = "https://api.tushare.pro"
    TUSHARE_TIMEOUT: float = 30.0
    TUSHARE_MAX_ATTEMPTS: int = Field(default=2, ge=1)

    BAIDU_TIMEOUT: float = 15.0

    # --- Pipeline ---
    SIMILARITY_THRESHOLD: float = Field(default=0.8, ge=0.0, le=1.0)
    MAX_RESULTS: int = Field(default=20, ge=0)
    HOT_NEWS_LIMIT: int = Field(default=100, ge=1)
    # Sin valor: no hay deadline global, cada fuente respeta su propio timeout
    AGGREGATION_DEADLINE: Optional[float] = Field(default=None, gt=0)


settings = Settings()
