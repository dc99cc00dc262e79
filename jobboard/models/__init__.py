"""
Database models package.
"""

from jobboard.models.job_posting import JobPosting
from jobboard.models.candidate import Candidate

__all__ = ["JobPosting", "Candidate"]
