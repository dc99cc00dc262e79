"""
Pydantic schemas for Candidate API requests/responses.

The foreign key travels as ``jobPostingId`` on the wire.
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class CandidateBase(BaseModel):
    """Base candidate schema with common fields."""
    name: Optional[str] = Field(None, description="Candidate name, at least 5 characters")
    cv: Optional[str] = Field(None, description="Curriculum vitae text, at least 100 characters")
    email: Optional[str] = Field(None, description="Contact email address")


class CandidateCreate(CandidateBase):
    """Create payload. The posting comes from the URL, never from the body."""
    pass


class CandidateUpdate(CandidateBase):
    """Update payload. Any field may change, including the owning posting."""
    job_posting_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("jobPostingId", "job_posting_id"),
    )


class CandidateResponse(CandidateBase):
    id: int
    job_posting_id: int = Field(
        ...,
        validation_alias=AliasChoices("job_posting_id", "jobPostingId"),
        serialization_alias="jobPostingId",
    )

    class Config:
        from_attributes = True
