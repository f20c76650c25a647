import os
from pathlib import Path
from typing import Literal

from dotenv import dotenv_values
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from .generation_settings import GenerationSettings

# Load .env for local/dev environments only for values missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from TERRA_* environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "plain"] = Field(default="json", description="Logging format")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # World Generation Configuration
    max_world_radius: int = Field(default=200, ge=0, description="Largest radius the API will build")
    max_stored_worlds: int = Field(
        default=100, ge=1, description="Worlds kept in memory before the oldest is dropped"
    )
    generation: GenerationSettings = Field(
        default_factory=GenerationSettings, description="Default generation parameters"
    )

    class Config:
        env_prefix = "TERRA_"
        env_nested_delimiter = "__"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @model_validator(mode="after")
    def check_radius(self) -> "Settings":
        if self.generation.radius > self.max_world_radius:
            raise ValueError(
                f"Default radius {self.generation.radius} exceeds max_world_radius {self.max_world_radius}"
            )
        return self


# Instantiate singleton settings object
settings = Settings()
