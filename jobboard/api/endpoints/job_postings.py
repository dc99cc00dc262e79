import logging
from typing import List, Optional, Union
from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.errors import StoreError
from jobboard.crud import job_posting as posting_crud
from jobboard.crud.job_posting import JobPostingQuery
from jobboard.models.job_posting import JobPosting
from jobboard.schemas.common import MessageResponse
from jobboard.schemas.job_posting import (
    JobPostingCreate,
    JobPostingListResponse,
    JobPostingResponse,
    JobPostingUpdate,
)

router = APIRouter(prefix="/jobpostings", tags=["Job Postings"])
logger = logging.getLogger(__name__)


def get_posting_or_404(db: Session, posting_id: int, with_candidates: bool = False) -> JobPosting:
    posting = posting_crud.get_by_id(db, posting_id, with_candidates=with_candidates)
    if posting is None:
        raise StoreError.not_found(f"Job posting {posting_id} not found")
    return posting


@router.get("", response_model=JobPostingListResponse)
def list_job_postings(request: Request, db: Session = Depends(get_db)):
    """
    List job postings.

    Query parameters:
    - description, deadline: substring filters
    - sortField: id, description or deadline; sortOrder=-1 sorts descending
    - page: zero-based page number; without it every match is returned
    - pageSize: records per page (default 2)

    ``count`` is the total number of postings stored, not the number of
    filtered matches.
    """
    query = JobPostingQuery.from_params(request.query_params)
    records = posting_crud.get_multi(db, query)
    count = posting_crud.count(db)
    return {"records": records, "count": count}


@router.post("", status_code=201, response_model=MessageResponse)
def create_job_posting(
    payload: Union[List[JobPostingCreate], JobPostingCreate] = Body(...),
    bulk: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Create one job posting, or many at once with ``?bulk=on`` and a JSON array body.
    """
    if bulk == "on":
        if not isinstance(payload, list):
            raise StoreError.validation("bulk=on expects a JSON array of job postings")
        posting_crud.bulk_create(db, payload)
    else:
        if isinstance(payload, list):
            raise StoreError.validation("A JSON array requires bulk=on")
        posting_crud.create(db, payload)

    return {"message": "created"}


@router.get("/{posting_id}", response_model=JobPostingResponse)
def get_job_posting(posting_id: int, db: Session = Depends(get_db)):
    return get_posting_or_404(db, posting_id)


@router.put("/{posting_id}", status_code=202, response_model=MessageResponse)
def update_job_posting(posting_id: int, payload: JobPostingUpdate, db: Session = Depends(get_db)):
    """
    Update a job posting. Only description and deadline are writable.
    """
    posting = get_posting_or_404(db, posting_id)
    posting_crud.update(db, posting, payload)
    return {"message": "accepted"}


@router.delete("/{posting_id}", status_code=202, response_model=MessageResponse)
def delete_job_posting(posting_id: int, db: Session = Depends(get_db)):
    """
    Delete a job posting together with all of its candidates.
    """
    posting = get_posting_or_404(db, posting_id, with_candidates=True)
    posting_crud.delete(db, posting)
    return {"message": "accepted"}
