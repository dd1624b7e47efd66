from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # GitHub Configuration
    GITHUB_TOKEN: Optional[str] = Field(default=None, description="GitHub Personal Access Token")
    GITHUB_API_BASE: str = Field(default="https://api.github.com")
    GITHUB_GRAPHQL_URL: str = Field(default="https://api.github.com/graphql")
    GITHUB_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    GITHUB_MAX_RETRIES: int = Field(default=2, ge=0, le=5)

    # Narrative Configuration (any OpenAI-compatible endpoint)
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="API key for the narrative model")
    NARRATIVE_ENABLED: bool = Field(default=True)
    NARRATIVE_BASE_URL: Optional[str] = Field(default=None)
    NARRATIVE_MODEL: str = Field(default="gpt-4o-mini")
    NARRATIVE_MAX_TOKENS: int = Field(default=300, ge=50, le=2000)
    NARRATIVE_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    NARRATIVE_FALLBACK_THEME: str = Field(default="growth")

    # Cache Configuration
    REDIS_URL: Optional[str] = Field(default=None)
    CACHE_TTL_SECONDS: int = Field(default=86400, ge=1)
    CACHE_KEY_PREFIX: str = Field(default="github-wrapped:")

    # Analytics Policy
    TOP_LANGUAGES_LIMIT: int = Field(default=10, ge=1, le=50)
    TOP_REPOSITORIES_LIMIT: int = Field(default=10, ge=1, le=100)
    LANGUAGE_FETCH_CONCURRENCY: int = Field(default=8, ge=1, le=50)
    WORK_STYLE_BURST_VARIANCE: float = Field(default=10.0, ge=0.0)
    WORK_STYLE_CONSISTENT_MEAN: float = Field(default=5.0, ge=0.0)

    # API Server Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)
    CORS_ORIGINS: str = Field(default="http://localhost:5173,http://localhost:3000")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")
    LOG_DIR: Optional[str] = Field(default=None)

    # Demo Mode
    DEMO_MODE: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v_upper

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either 'json' or 'pretty'."""
        allowed_formats = {"json", "pretty"}
        v_lower = v.lower()
        if v_lower not in allowed_formats:
            raise ValueError(f"LOG_FORMAT must be one of {allowed_formats}")
        return v_lower

    @field_validator("GITHUB_TOKEN")
    @classmethod
    def validate_github_token(cls, v: Optional[str]) -> Optional[str]:
        """Validate GitHub token format when one is configured."""
        if not v:
            return None
        if not v.startswith(("ghp_", "github_pat_")):
            raise ValueError("GITHUB_TOKEN must start with 'ghp_' or 'github_pat_'")
        return v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# this will be imported throughout the project
settings = Settings()
