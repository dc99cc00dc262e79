"""
Candidate database model.

An applicant tied to exactly one job posting. Field rules are enforced
when attributes are set, so a bad value fails inside the store call that
carries it.
"""

import re
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship, validates
from email_validator import validate_email
from jobboard.core.database import Base

NAME_MIN_LENGTH = 5
CV_MIN_LENGTH = 100


def _single_line_run(length):
    """Pattern matching at least `length` characters with no line break between them."""
    return re.compile(r"[^\n\r\u2028\u2029]{%d,}" % length)


NAME_PATTERN = _single_line_run(NAME_MIN_LENGTH)
CV_PATTERN = _single_line_run(CV_MIN_LENGTH)


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    cv = Column(Text, nullable=True)
    email = Column(String, nullable=True)
    job_posting_id = Column(
        "jobPostingId",
        Integer,
        ForeignKey("jobPostings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    job_posting = relationship("JobPosting", back_populates="candidates")

    @validates("name")
    def validate_name(self, key, value):
        if value is not None and not NAME_PATTERN.search(value):
            raise ValueError(f"{key} must be at least {NAME_MIN_LENGTH} characters")
        return value

    @validates("cv")
    def validate_cv(self, key, value):
        if value is not None and not CV_PATTERN.search(value):
            raise ValueError(f"{key} must be at least {CV_MIN_LENGTH} characters")
        return value

    @validates("email")
    def validate_email_address(self, key, value):
        if value is not None:
            # Syntax only; EmailNotValidError is a ValueError
            validate_email(value, check_deliverability=False)
        return value

    def __repr__(self):
        return f"<Candidate(id={self.id}, name='{self.name}', job_posting_id={self.job_posting_id})>"
