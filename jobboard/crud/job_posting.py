"""
CRUD operations for JobPosting model.

Implements the Repository pattern to encapsulate all database operations
for job postings, providing a clean interface for the API layer. Every
function reports failures as StoreError.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from sqlalchemy import String, cast
from sqlalchemy.orm import Session, selectinload

from jobboard.core.config import settings
from jobboard.core.errors import StoreError, translate_errors
from jobboard.models.job_posting import JobPosting
from jobboard.schemas.job_posting import JobPostingCreate, JobPostingUpdate

logger = logging.getLogger(__name__)

# Query keys that act as substring filters on the list endpoint
FILTERABLE_FIELDS = ("description", "deadline")

# Only these columns may appear in ORDER BY
SORTABLE_FIELDS = {
    "id": JobPosting.id,
    "description": JobPosting.description,
    "deadline": JobPosting.deadline,
}

# Fields a PUT is allowed to touch
UPDATABLE_FIELDS = ("description", "deadline")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Read the leading integer of a query value ("3", " 3", "3px" -> 3), else None."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # more digits than int() will convert
        return None


@dataclass
class JobPostingQuery:
    """
    Filter, sort and pagination options for listing job postings.

    ``page`` is zero-based; when it is None every matching record is
    returned and ``page_size`` is ignored.
    """
    filters: Dict[str, str] = field(default_factory=dict)
    sort_field: Optional[str] = None
    descending: bool = False
    page_size: int = field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)
    page: Optional[int] = None

    @classmethod
    def from_params(cls, params: Mapping[str, str], default_page_size: Optional[int] = None) -> "JobPostingQuery":
        """
        Build a query from raw request parameters.

        Recognised keys: the filterable fields, sortField, sortOrder ("-1"
        means descending), pageSize and page. Anything else is ignored.
        """
        if default_page_size is None:
            default_page_size = settings.DEFAULT_PAGE_SIZE

        page_size = _parse_int(params.get("pageSize"))
        if page_size is None or page_size < 1:
            page_size = default_page_size

        page = _parse_int(params.get("page"))
        if page is not None and page < 0:
            page = None

        return cls(
            filters={key: params[key] for key in FILTERABLE_FIELDS if key in params},
            sort_field=params.get("sortField") or None,
            descending=params.get("sortOrder") == "-1",
            page_size=page_size,
            page=page,
        )

    @property
    def offset(self) -> Optional[int]:
        if self.page is None:
            return None
        return self.page_size * self.page


def create(db: Session, data: JobPostingCreate) -> JobPosting:
    """
    Create a new job posting in the database.

    Args:
        db: Database session
        data: Parsed creation payload

    Returns:
        Created JobPosting instance with id
    """
    with translate_errors(db):
        posting = JobPosting(description=data.description, deadline=data.deadline)
        db.add(posting)
        db.commit()
        db.refresh(posting)

    logger.info(f"Created job posting {posting.id}")
    return posting


def bulk_create(db: Session, items: List[JobPostingCreate]) -> List[JobPosting]:
    """
    Insert several job postings in one commit. Either all are stored or none.
    """
    with translate_errors(db):
        postings = [JobPosting(description=item.description, deadline=item.deadline) for item in items]
        db.add_all(postings)
        db.commit()

    logger.info(f"Bulk created {len(postings)} job postings")
    return postings


def get_by_id(db: Session, posting_id: int, with_candidates: bool = False) -> Optional[JobPosting]:
    """
    Retrieve a job posting by its ID.

    Args:
        db: Database session
        posting_id: JobPosting ID to retrieve
        with_candidates: Load the posting's candidates in the same round trip

    Returns:
        JobPosting instance if found, None otherwise
    """
    with translate_errors(db):
        query = db.query(JobPosting)
        if with_candidates:
            query = query.options(selectinload(JobPosting.candidates))
        return query.filter(JobPosting.id == posting_id).first()


def get_multi(db: Session, query: JobPostingQuery) -> List[JobPosting]:
    """
    Retrieve job postings matching the query's filters, in the requested
    order, one page at a time when a page was requested.

    Raises:
        StoreError(VALIDATION): If the sort field is not sortable
    """
    statement = db.query(JobPosting)

    for key, value in query.filters.items():
        column = getattr(JobPosting, key)
        # Dates are matched on their ISO text form
        statement = statement.filter(cast(column, String).like(f"%{value}%"))

    if query.sort_field:
        column = SORTABLE_FIELDS.get(query.sort_field)
        if column is None:
            raise StoreError.validation(f"Cannot sort job postings by '{query.sort_field}'")
        statement = statement.order_by(column.desc() if query.descending else column.asc())

    if query.page is not None:
        statement = statement.limit(query.page_size).offset(query.offset)

    with translate_errors(db):
        return statement.all()


def count(db: Session) -> int:
    """Total number of job postings stored. Filters are not applied."""
    with translate_errors(db):
        return db.query(JobPosting).count()


def update(db: Session, posting: JobPosting, data: JobPostingUpdate) -> JobPosting:
    """
    Apply the fields present in ``data`` to an existing posting.

    Only description and deadline are ever written.
    """
    changes = data.model_dump(exclude_unset=True)

    with translate_errors(db):
        for key in UPDATABLE_FIELDS:
            if key in changes:
                setattr(posting, key, changes[key])
        db.commit()
        db.refresh(posting)

    logger.info(f"Updated job posting {posting.id}: {sorted(set(changes) & set(UPDATABLE_FIELDS))}")
    return posting


def delete(db: Session, posting: JobPosting) -> None:
    """
    Delete a job posting and, through the ORM cascade, its candidates.

    The posting should have been loaded with ``with_candidates=True`` so
    the cascade sees every child.
    """
    posting_id = posting.id
    candidate_count = len(posting.candidates)

    with translate_errors(db):
        db.delete(posting)
        db.commit()

    logger.info(f"Deleted job posting {posting_id} and {candidate_count} candidates")
