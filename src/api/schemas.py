"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Request Schemas (what clients send to us)
# =============================================================================


class AnalyzeRequest(BaseModel):
    """Request body for an AI readiness analysis."""

    url: str = Field(
        default="",
        description="The URL of the page to analyze (scheme optional)",
        examples=["example.com"],
    )


# =============================================================================
# Response Schemas (what we send back to clients)
# =============================================================================


class CamelModel(BaseModel):
    """Serializes field names in camelCase, accepts either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CheckResultResponse(CamelModel):
    """Response schema for a single check."""

    id: str
    label: str
    status: str
    score: float
    details: str
    recommendation: str


class AnalysisMetadataResponse(CamelModel):
    """Page metadata echoed back with the analysis."""

    title: str | None = None
    description: str | None = None
    analyzed_at: str


class AnalysisResponse(CamelModel):
    """Response schema for a completed analysis."""

    success: bool
    url: str
    overall_score: int
    checks: list[CheckResultResponse]
    html_content: str
    metadata: AnalysisMetadataResponse


# =============================================================================
# Health Check
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "healthy"
    service: str = "ai-readiness"
    version: str = "0.1.0"
