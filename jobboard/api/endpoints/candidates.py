"""
API endpoints for candidate management.

Candidates only exist under a job posting, so every route first loads the
posting from the path and answers 404 when it is missing.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.api.endpoints.job_postings import get_posting_or_404
from jobboard.core.database import get_db
from jobboard.core.errors import StoreError
from jobboard.crud import candidate as candidate_crud
from jobboard.models.candidate import Candidate
from jobboard.schemas.candidate import CandidateCreate, CandidateResponse, CandidateUpdate
from jobboard.schemas.common import MessageResponse

router = APIRouter(prefix="/jobpostings/{posting_id}/candidates", tags=["Candidates"])
logger = logging.getLogger(__name__)


def get_candidate_or_404(db: Session, posting_id: int, candidate_id: int) -> Candidate:
    posting = get_posting_or_404(db, posting_id)
    candidate = candidate_crud.get_for_posting(db, posting, candidate_id)
    if candidate is None:
        raise StoreError.not_found(f"Candidate {candidate_id} not found for job posting {posting_id}")
    return candidate


@router.get("", response_model=List[CandidateResponse])
def list_candidates(posting_id: int, db: Session = Depends(get_db)):
    """
    List all candidates who applied to a job posting.
    """
    posting = get_posting_or_404(db, posting_id)
    return candidate_crud.list_for_posting(db, posting)


@router.post("", status_code=201, response_model=MessageResponse)
def create_candidate(posting_id: int, payload: CandidateCreate, db: Session = Depends(get_db)):
    """
    Add a candidate to a job posting.

    Field rules (checked by the store, failures answer 500):
    - name: at least 5 characters
    - cv: at least 100 characters
    - email: valid address syntax
    """
    posting = get_posting_or_404(db, posting_id)
    candidate_crud.create_for_posting(db, posting, payload)
    return {"message": "created"}


@router.get("/{candidate_id}", response_model=CandidateResponse)
def get_candidate(posting_id: int, candidate_id: int, db: Session = Depends(get_db)):
    return get_candidate_or_404(db, posting_id, candidate_id)


@router.put("/{candidate_id}", status_code=202, response_model=MessageResponse)
def update_candidate(
    posting_id: int,
    candidate_id: int,
    payload: CandidateUpdate,
    db: Session = Depends(get_db)
):
    candidate = get_candidate_or_404(db, posting_id, candidate_id)
    candidate_crud.update(db, candidate, payload)
    return {"message": "accepted"}


@router.delete("/{candidate_id}", status_code=202, response_model=MessageResponse)
def delete_candidate(posting_id: int, candidate_id: int, db: Session = Depends(get_db)):
    candidate = get_candidate_or_404(db, posting_id, candidate_id)
    candidate_crud.delete(db, candidate)
    return {"message": "accepted"}
