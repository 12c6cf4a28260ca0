"""
Configuration management for the voice ledger resolver.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration settings loaded from environment."""

    # Matching
    MIN_MATCH_SCORE: float = float(os.getenv('MIN_MATCH_SCORE', '0.6'))

    # Language handling
    DEFAULT_LANGUAGE: str = os.getenv('DEFAULT_LANGUAGE', 'en')
    ENGLISH_RETRY: bool = _env_bool('ENGLISH_RETRY', 'true')

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON: bool = _env_bool('LOG_JSON', 'false')

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of human-readable problems (empty when valid)
        """
        problems = []
        if not 0.0 <= cls.MIN_MATCH_SCORE <= 1.0:
            problems.append(f'MIN_MATCH_SCORE must be within [0, 1], got {cls.MIN_MATCH_SCORE}')
        if not cls.DEFAULT_LANGUAGE:
            problems.append('DEFAULT_LANGUAGE must not be empty')
        return problems


# Singleton config instance
config = Config()
