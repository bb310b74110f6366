"""Core data models for the talent search service."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Format of the timestamp fields, in the index mapping and in range queries.
DATE_FORMAT = "date_optional_time"

# Ids are mapped as 32-bit integers, weight as a 64-bit long.
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Talent(BaseModel):
    """A candidate profile as stored in the search index.

    Frozen: a changed profile is re-indexed as a whole document under the
    same id. Unknown keys in incoming payloads are ignored.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0, le=INT32_MAX)
    accepted: bool
    work_roles: list[str]
    work_experience: str
    work_locations: list[str]
    work_authorization: str
    skills: list[str]
    summary: str
    company_ids: list[int]
    batch_starts_at: str
    batch_ends_at: str
    added_to_batch_at: str
    weight: int = Field(ge=INT64_MIN, le=INT64_MAX)
    blocked_companies: list[int]

    @field_validator("batch_starts_at", "batch_ends_at", "added_to_batch_at")
    @classmethod
    def iso_timestamp(cls, v: str) -> str:
        try:
            datetime.fromisoformat(v)
        except ValueError as e:
            msg = f"not an ISO-8601 timestamp: '{v}'"
            raise ValueError(msg) from e
        return v

    def to_document(self) -> dict[str, Any]:
        """Return the index document for this talent."""
        return self.model_dump()


class Hit(BaseModel):
    """A single search hit: the talent id and its relevance score, if any.

    ``score`` is None when the query was sorted by fields rather than
    ranked by relevance.
    """

    model_config = ConfigDict(frozen=True)

    talent_id: int
    score: float | None = None
