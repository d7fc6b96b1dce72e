"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from auction.models import DifficultyMode
from auction.policy import DEFAULT_POLICY, Policy, load_policy


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Engine
    default_difficulty: str = field(
        default_factory=lambda: os.getenv("AUCTION_DEFAULT_DIFFICULTY", "normal")
    )
    policy_file: Optional[str] = field(
        default_factory=lambda: os.getenv("AUCTION_POLICY_FILE") or None
    )

    # Output
    report_dir: str = field(default_factory=lambda: os.getenv("AUCTION_REPORT_DIR", "./reports"))
    log_level: str = field(default_factory=lambda: os.getenv("AUCTION_LOG_LEVEL", "WARNING"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def difficulty(self) -> DifficultyMode:
        """Configured default difficulty; unknown values fall back to normal."""
        return DifficultyMode.from_string(self.default_difficulty) or DifficultyMode.NORMAL

    def policy(self) -> Policy:
        """Base policy: the default, or the overlay file merged onto it."""
        if self.policy_file:
            return load_policy(self.policy_file)
        return DEFAULT_POLICY

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "default_difficulty": self.default_difficulty,
            "policy_file": self.policy_file,
            "report_dir": self.report_dir,
            "log_level": self.log_level,
        }
