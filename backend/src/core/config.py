"""
Configuration Management
Pydantic Settings with strict validation
"""
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "Job Portal Gateway"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development")

    # Backend API (proxy target)
    BACKEND_API_URL: str = "http://localhost:3131/api"

    # API client endpoints
    NEXT_PUBLIC_API_URL: str = Field(
        default="http://localhost:3131/api",
        description="Primary base URL used by the API client"
    )
    FALLBACK_API_URL: str = Field(
        default="http://localhost:3000/api",
        description="Secondary base URL, normally this gateway's own /api routes"
    )
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Local LLM (Ollama)
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1"

    # Session tokens
    JWT_SECRET: str = "fallback-secret-key"
    JWT_ALGORITHM: str = "HS256"
    SESSION_MAX_AGE_DAYS: int = 7

    # Client-side key/value storage
    STORAGE_BACKEND: str = Field(default="file", description="memory, file or redis")
    STORAGE_PATH: str = "./.jobportal/storage.json"
    REDIS_URL: str = "redis://localhost:6379/0"

    # File Upload
    UPLOAD_DIR: str = "./uploads"
    MAX_PHOTO_SIZE_MB: int = 5
    ALLOWED_PHOTO_TYPES: List[str] = Field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/gif", "image/webp"]
    )

    # CORS
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON_FORMAT: bool = True
    LOG_TO_FILE: bool = False

    @field_validator("BACKEND_API_URL", "NEXT_PUBLIC_API_URL", "FALLBACK_API_URL", "OLLAMA_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URLs are joined with paths that start with '/'"""
        return v.rstrip("/")

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Only the three known storage backends are accepted"""
        v = v.lower()
        if v not in ("memory", "file", "redis"):
            raise ValueError(f"Unknown storage backend: {v}")
        return v


# Global settings instance
settings = Settings()
