"""
Engine settings and configuration management using Pydantic BaseSettings.
"""

from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Environment enumeration"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class AlertThresholds(BaseSettings):
    """Thresholds for the advisory alert rules."""
    costo_maximo_por_huevo: Decimal = Field(default=Decimal("5.00"), ge=0)
    eficiencia_minima: float = Field(default=80.0, ge=0, description="Percent of theoretical production")
    max_caida_produccion_pct: float = Field(default=30.0, ge=0, le=100)
    max_incremento_gasto_pct: float = Field(default=20.0, ge=0)
    exceso_critico_pct: float = Field(default=50.0, ge=0, description="Excess over the cost maximum that escalates to CRITICAL")
    factor_critico_eficiencia: float = Field(default=0.5, gt=0, le=1)

    @property
    def costo_critico_por_huevo(self) -> Decimal:
        return self.costo_maximo_por_huevo * (1 + Decimal(str(self.exceso_critico_pct)) / 100)

    @property
    def eficiencia_critica(self) -> float:
        return self.eficiencia_minima * self.factor_critico_eficiencia

    model_config = SettingsConfigDict(env_prefix="ALERT_")


class AnalysisConfig(BaseSettings):
    """Statistics window, trend and report settings."""
    window_days: int = Field(default=30, ge=1)
    umbral_tendencia_pct: float = Field(default=5.0, ge=0)
    dias_proyeccion: int = Field(default=30, ge=1)
    ranking_enabled: bool = False
    precio_venta_huevo: Optional[Decimal] = Field(default=None, gt=0)
    edad_maxima_semanas: int = Field(default=80, ge=1)
    participacion_levante_max_pct: float = Field(default=60.0, ge=0, le=100)

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")


class AppConfig(BaseSettings):
    """Application configuration settings."""
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    service_name: str = "egg_costing"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="APP_")


class Settings(BaseSettings):
    """Centralized engine settings manager using Pydantic BaseSettings."""

    alerts: AlertThresholds = Field(default_factory=AlertThresholds)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    def __init__(self, **kwargs):
        self._load_env_file()
        super().__init__(**kwargs)

    @staticmethod
    def _load_env_file() -> None:
        """Load environment variables from .env file."""
        env_file = Path(".env")
        if env_file.exists():
            from dotenv import load_dotenv
            load_dotenv(env_file)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
