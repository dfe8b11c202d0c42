"""
Application configuration management.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # GitHub
    github_api_url: str = "https://api.github.com"
    user_agent: str = "commit-tracker-widget"
    
    # Refresh policy
    refresh_interval_minutes: int = 5
    
    # Widget
    widget_variant: Literal["configurable", "fixed"] = "configurable"
    widget_account: Optional[str] = None
    widget_repository: Optional[str] = None
    widget_branch: Optional[str] = None
    
    # Repository tracked by the fixed variant
    fixed_account: str = "apple"
    fixed_repository: str = "swift"
    fixed_branch: str = "master"
    
    # Application
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
