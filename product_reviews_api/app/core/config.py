"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, so no settings library is required.  Defaults
are provided for all fields.  In a production deployment you should
override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Reviews API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Version segment of the Shopify Admin API URL, e.g.
    # ``https://{shop}/admin/api/2024-10/graphql.json``.
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2024-10")

    # Upper bound for a single upstream request.  When exceeded the
    # lookup fails with ``UpstreamUnavailable``.
    upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

    # Shop hosts accepted from a session.  The upstream URL is built from
    # the shop domain, so anything outside this pattern is rejected as an
    # invalid session.
    shop_domain_pattern: str = os.getenv(
        "SHOP_DOMAIN_PATTERN", r"^[a-z0-9][a-z0-9-]*\.myshopify\.com$"
    )

    # Location of the JSON review collection.  Relative paths are
    # resolved against the package root by ``review_store``.
    reviews_file: str = os.getenv("REVIEWS_FILE", "data/reviews.json")

    # When true, an unreadable review file makes appends fail with
    # ``PersistenceError`` instead of being moved aside and replaced.
    reviews_strict_load: bool = os.getenv("REVIEWS_STRICT_LOAD", "false").lower() in {"1", "true", "yes"}

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
