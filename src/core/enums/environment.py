"""Runtime environments for Beacon.

Settings and the logging adapter switch behavior on these values
(renderer choice, table bootstrap, error detail exposure).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
