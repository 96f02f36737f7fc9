"""
Grammar check API contract shared between the service and its clients.

Field names are snake_case in Python and camelCase on the wire
(``shortMessage``, ``processingTime``, ``sessionId``). Serialize with
``model_dump(mode="json", by_alias=True, exclude_none=True)``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common_core.domain_enums import GrammarErrorType, GrammarProvider

MAX_REPLACEMENTS = 5


class GrammarRule(BaseModel):
    """Rule that produced a grammar error."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="UNKNOWN", description="Provider-specific rule identifier")
    description: str = Field(default="", description="Human readable rule description")
    category: str = Field(default="", description="Provider-specific category name")


class GrammarContext(BaseModel):
    """Display context surrounding an error, as returned by the provider."""

    text: str
    offset: int = Field(ge=0)
    length: int = Field(ge=0)


class GrammarError(BaseModel):
    """A single normalized grammar issue within the checked text."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    short_message: str | None = Field(default=None, alias="shortMessage")
    offset: int = Field(ge=0, description="Character index into the original text")
    length: int = Field(gt=0, description="Length of the flagged span")
    replacements: list[str] = Field(
        default_factory=list,
        description="Candidate replacements, most plausible first",
    )
    rule: GrammarRule = Field(default_factory=GrammarRule)
    type: GrammarErrorType = GrammarErrorType.OTHER
    context: GrammarContext | None = None

    @field_validator("replacements")
    @classmethod
    def _cap_replacements(cls, value: list[str]) -> list[str]:
        return value[:MAX_REPLACEMENTS]

    def fits_within(self, text: str) -> bool:
        """Return True if the error span lies inside ``text``."""
        return self.offset + self.length <= len(text)


class GrammarCheckRequest(BaseModel):
    """Incoming grammar check request.

    ``text`` and ``provider`` are accepted as arbitrary JSON values so the
    orchestrator can report missing or mistyped fields with user-facing
    messages instead of pydantic's.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Any = None
    provider: Any = None
    session_id: Any = Field(default=None, alias="sessionId")
    language: Any = None


class GrammarCheckMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: GrammarProvider
    processing_time: int = Field(alias="processingTime", ge=0)
    cached: bool
    timestamp: int = Field(description="Epoch milliseconds when the response was built")
    language: str


class GrammarCheckResponse(BaseModel):
    """Response envelope returned for every successful check."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    errors: list[GrammarError]
    metadata: GrammarCheckMetadata


class ProviderUsage(BaseModel):
    total: int = 0


class UsageStats(BaseModel):
    """Aggregate provider usage and session counts kept by the result cache."""

    model_config = ConfigDict(populate_by_name=True)

    stats: dict[str, ProviderUsage]
    total_sessions: int = Field(default=0, alias="totalSessions")
