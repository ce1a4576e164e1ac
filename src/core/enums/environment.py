"""Application environment types.

Defines the runtime environments the policy library is embedded in.
Used by Settings to pick the log renderer and database defaults.

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution with an isolated database
- CI: Continuous integration environment
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
