import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == '':
        return None
    return int(value)


class Config:
    """Statistics engine configuration settings"""
    
    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///playgroup_stats.db')
    
    # Logging settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    
    # Statistics thresholds
    MIN_GAMES_FOR_BEST_COMMANDER = int(os.getenv('MIN_GAMES_FOR_BEST_COMMANDER', 5))
    MIN_GAMES_FOR_WIN_RATE_RANKING = int(os.getenv('MIN_GAMES_FOR_WIN_RATE_RANKING', 5))
    TOP_COMMANDER_LIMIT = int(os.getenv('TOP_COMMANDER_LIMIT', 10))
    
    # Trend settings
    # Default window; callers may override per request
    TREND_WINDOW_SIZE = int(os.getenv('TREND_WINDOW_SIZE', 10))
    TREND_REQUIRE_FULL_WINDOW = os.getenv('TREND_REQUIRE_FULL_WINDOW', 'True').lower() == 'true'
    HISTOGRAM_MONTHS = _optional_int(os.getenv('HISTOGRAM_MONTHS'))  # None = full span
    
    @classmethod
    def validate(cls):
        """Validate that configuration values are usable"""
        if not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL is required")
        if cls.MIN_GAMES_FOR_BEST_COMMANDER < 1:
            raise ValueError("MIN_GAMES_FOR_BEST_COMMANDER must be at least 1")
        if cls.MIN_GAMES_FOR_WIN_RATE_RANKING < 1:
            raise ValueError("MIN_GAMES_FOR_WIN_RATE_RANKING must be at least 1")
        if cls.TOP_COMMANDER_LIMIT < 1:
            raise ValueError("TOP_COMMANDER_LIMIT must be at least 1")
        if cls.TREND_WINDOW_SIZE < 1:
            raise ValueError("TREND_WINDOW_SIZE must be at least 1")
        if cls.HISTOGRAM_MONTHS is not None and cls.HISTOGRAM_MONTHS < 1:
            raise ValueError("HISTOGRAM_MONTHS must be at least 1 when set")
