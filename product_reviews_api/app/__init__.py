"""
Application package initializer.

The service looks up products on the commerce platform and stores
shopper reviews.  Business logic lives in ``services``, persistence
and cross-cutting concerns in ``core``, payload models in ``schemas``
and HTTP routes in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
