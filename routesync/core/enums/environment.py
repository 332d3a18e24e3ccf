"""Application environment types.

Defines the runtime environments routesync can run in.
Used by Settings and the container to pick adapters (e.g. log renderer).

Environments:
- DEVELOPMENT: Local runs, human-readable logs
- TESTING: Automated test execution, JSON logs
- CI: Continuous integration pipelines, JSON logs
- PRODUCTION: Deployment pipelines syncing the real gateway
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
