"""
Configuration settings for the IT Subsidy Assistant
"""
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="subsidy_assistant")

    # Application Configuration
    app_name: str = Field(default="IT Subsidy Assistant")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # API Configuration
    api_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Matching Configuration
    recommendation_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum match score counted as a recommendation"
    )

    # Catalog Configuration
    catalog_path: Optional[str] = Field(
        default=None,
        description="JSON file used to seed the subsidy catalog (packaged default if unset)"
    )
    seed_catalog_on_startup: bool = Field(default=True)

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Create global settings instance
settings = Settings()
