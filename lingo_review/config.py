from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of lingo_review folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'lingo_review.db'}"
    echo_sql: bool = False
    
    # Learning settings
    default_language: str = "spanish"
    quiz_pass_ratio: float = 0.7  # share of correct answers that completes a scenario
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    class Config:
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
