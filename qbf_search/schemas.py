"""
Pydantic schemas for configuration and settings.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchConfig(BaseModel):
    """Local search configuration."""
    policy: str = Field(default="best", pattern="^(best|first)$")
    improvement_epsilon: float = Field(default=1e-9, ge=0)
    repair_frequency_max: int = Field(default=4, ge=1)
    trash_frequency_min: int = Field(default=4, ge=1)
    trash_frequency_max: int = Field(default=8, ge=2)  # exclusive
    trash_frequency_constant: int = Field(default=5, ge=1)
    trash_constant_probability: float = Field(default=0.9, ge=0, le=1)
    max_rounds: Optional[int] = Field(default=None, ge=1)
    random_seed: int = Field(default=42)

    @model_validator(mode="after")
    def trash_range_not_empty(self):
        """Ensure the trash admission range [min, max) holds at least one value."""
        if self.trash_frequency_max <= self.trash_frequency_min:
            raise ValueError("trash_frequency_max must be greater than trash_frequency_min")
        return self


class RepairConfig(BaseModel):
    """Repair configuration."""
    strategy: str = Field(
        default="randomized",
        pattern="^(randomized|deterministic|window)$"
    )
    left_probability: float = Field(default=0.5, ge=0, le=1)


class InstanceConfig(BaseModel):
    """Generated QBF instance."""
    size: int = Field(default=40, ge=1)
    seed: int = Field(default=0)
    low: int = Field(default=-10)
    high: int = Field(default=10)
    maximize: bool = Field(default=True)

    @model_validator(mode="after")
    def high_not_below_low(self):
        """Ensure the coefficient range is not empty."""
        if self.high < self.low:
            raise ValueError("high must not be below low")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class ProjectConfig(BaseModel):
    """Top-level project configuration."""
    name: str = Field(default="QBF Local Search")
    version: str = Field(default="0.1.0")


class AppConfig(BaseModel):
    """Complete application configuration loaded from params.yaml."""
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    repair: RepairConfig = Field(default_factory=RepairConfig)
    instance: InstanceConfig = Field(default_factory=InstanceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class Settings(BaseSettings):
    """Environment-based settings."""
    config_path: str = Field(default="config/params.yaml")
    log_level: Optional[str] = Field(default=None, pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    model_config = SettingsConfigDict(
        env_prefix="QBF_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
