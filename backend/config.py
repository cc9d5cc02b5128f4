"""
Configuration settings for the Transaction Text Parser.
Centralized configuration management for the application.
"""

import os
from pathlib import Path


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Transaction Text Parser"
    VERSION = "1.0.0"

    # Amount Settings (Rupiah, no sub-units)
    MAX_AMOUNT: int = int(os.getenv("MAX_AMOUNT", "10000000000"))
    MIN_CURRENCY_AMOUNT: int = int(os.getenv("MIN_CURRENCY_AMOUNT", "1000"))
    SMALL_NUMBER_MULTIPLIER: int = int(os.getenv("SMALL_NUMBER_MULTIPLIER", "1000"))

    # Date Settings
    MAX_DAYS_AGO: int = int(os.getenv("MAX_DAYS_AGO", "30"))

    # Defaults applied when no keyword matches
    DEFAULT_TRANSACTION_TYPE: str = os.getenv("DEFAULT_TRANSACTION_TYPE", "expense")
    DEFAULT_INCOME_CATEGORY: str = os.getenv("DEFAULT_INCOME_CATEGORY", "Gaji")
    DEFAULT_EXPENSE_CATEGORY: str = os.getenv("DEFAULT_EXPENSE_CATEGORY", "Lainnya")

    # Description Settings
    MIN_DESCRIPTION_LENGTH: int = int(os.getenv("MIN_DESCRIPTION_LENGTH", "3"))
    DESCRIPTION_PLACEHOLDER: str = os.getenv("DESCRIPTION_PLACEHOLDER", "Transaction")

    # Processing Settings
    MAX_BATCH_LINES: int = int(os.getenv("MAX_BATCH_LINES", "100"))

    # Validation Settings
    STRICT_MODE: bool = os.getenv("STRICT_MODE", "false").lower() == "true"
    ALLOW_ZERO_AMOUNTS: bool = os.getenv("ALLOW_ZERO_AMOUNTS", "false").lower() == "true"

    # Logging Settings
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PARSER_LOG_LEVEL: str = os.getenv("PARSER_LOG_LEVEL", "")
    LOG_FILE: str = os.getenv("LOG_FILE", "")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "max_amount": cls.MAX_AMOUNT,
            "max_days_ago": cls.MAX_DAYS_AGO,
            "default_transaction_type": cls.DEFAULT_TRANSACTION_TYPE,
            "default_income_category": cls.DEFAULT_INCOME_CATEGORY,
            "default_expense_category": cls.DEFAULT_EXPENSE_CATEGORY,
            "min_description_length": cls.MIN_DESCRIPTION_LENGTH,
            "max_batch_lines": cls.MAX_BATCH_LINES,
            "strict_mode": cls.STRICT_MODE,
            "log_dir": str(cls.LOG_DIR),
            "log_level": cls.LOG_LEVEL,
            "parser_log_level": cls.PARSER_LOG_LEVEL,
            "log_file": cls.LOG_FILE,
        }


# Create a singleton instance
config = Config()
