"""
CRUD operations for Candidate model.

Candidates are always reached through their job posting: lookups are
scoped to the parent's id.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jobboard.core.errors import translate_errors
from jobboard.models.candidate import Candidate
from jobboard.models.job_posting import JobPosting
from jobboard.schemas.candidate import CandidateCreate, CandidateUpdate

logger = logging.getLogger(__name__)


def create_for_posting(db: Session, posting: JobPosting, data: CandidateCreate) -> Candidate:
    """
    Create a candidate attached to ``posting``.

    Args:
        db: Database session
        posting: Owning job posting
        data: Parsed creation payload

    Returns:
        Created Candidate instance with id
    """
    with translate_errors(db):
        candidate = Candidate(
            name=data.name,
            cv=data.cv,
            email=data.email,
            job_posting_id=posting.id,
        )
        db.add(candidate)
        db.commit()
        db.refresh(candidate)

    logger.info(f"Created candidate {candidate.id} for job posting {posting.id}")
    return candidate


def list_for_posting(db: Session, posting: JobPosting) -> List[Candidate]:
    with translate_errors(db):
        return (
            db.query(Candidate)
            .filter(Candidate.job_posting_id == posting.id)
            .order_by(Candidate.id)
            .all()
        )


def get_for_posting(db: Session, posting: JobPosting, candidate_id: int) -> Optional[Candidate]:
    """
    Find one of the posting's candidates by id.

    Returns:
        The first matching Candidate, or None if the posting has no such candidate
    """
    with translate_errors(db):
        return (
            db.query(Candidate)
            .filter(Candidate.job_posting_id == posting.id, Candidate.id == candidate_id)
            .first()
        )


def update(db: Session, candidate: Candidate, data: CandidateUpdate) -> Candidate:
    """Write every field present in ``data``, including a new owning posting."""
    changes = data.model_dump(exclude_unset=True)

    with translate_errors(db):
        for key, value in changes.items():
            setattr(candidate, key, value)
        db.commit()
        db.refresh(candidate)

    logger.info(f"Updated candidate {candidate.id}: {sorted(changes)}")
    return candidate


def delete(db: Session, candidate: Candidate) -> None:
    candidate_id = candidate.id

    with translate_errors(db):
        db.delete(candidate)
        db.commit()

    logger.info(f"Deleted candidate {candidate_id}")
