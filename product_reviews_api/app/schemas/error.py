"""
Error body returned by every endpoint.

Produced from ``core.errors.ReviewAppError.to_dict``; ``fields`` and
``details`` are only present for invalid review submissions and
``upstreamStatus`` only when the commerce platform refused a request.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    fields: Optional[list[str]] = None
    details: Optional[dict[str, str]] = None
    upstream_status: Optional[int] = Field(None, alias="upstreamStatus")
