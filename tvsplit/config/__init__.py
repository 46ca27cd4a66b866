"""Runtime configuration: environment loading and logging setup."""

from dotenv import load_dotenv

from tvsplit.config.logging import LoggingObserver, configure_logging

# Load environment variables from .env file if it exists
load_dotenv()

__all__ = ["LoggingObserver", "configure_logging"]
