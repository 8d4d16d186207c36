"""Application environment types.

Defines the different runtime environments for Shutterfeed.
Used by Settings to determine environment-specific behavior.

Environments:
- DEVELOPMENT: Local development with hot reload, console logs
- TESTING: Automated test execution (JSON logs)
- CI: Continuous integration environment
- PRODUCTION: Production deployment (JSON logs)
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
