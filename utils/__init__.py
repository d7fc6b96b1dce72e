"""
Utility modules for the auction trainer.
"""

from .formatting import format_currency, format_percent, format_eok, format_won
from .config import Config

__all__ = ["format_currency", "format_percent", "format_eok", "format_won", "Config"]
