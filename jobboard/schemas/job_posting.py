from pydantic import BaseModel
from typing import List, Optional
from datetime import date


class JobPostingCreate(BaseModel):
    """Schema for creating a job posting. Unknown keys are ignored."""
    description: Optional[str] = None
    deadline: Optional[date] = None


class JobPostingUpdate(BaseModel):
    """Only description and deadline may be changed after creation"""
    description: Optional[str] = None
    deadline: Optional[date] = None


class JobPostingResponse(BaseModel):
    """Schema for job posting response"""
    id: int
    description: Optional[str] = None
    deadline: Optional[date] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobPostingListResponse(BaseModel):
    """One page of job postings plus the total number of postings stored"""
    records: List[JobPostingResponse]
    count: int
