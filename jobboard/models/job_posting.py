import re
from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship, validates
from jobboard.core.database import Base

DESCRIPTION_MIN_LENGTH = 3

# at least N characters on a single line
DESCRIPTION_PATTERN = re.compile(r"[^\n\r\u2028\u2029]{%d,}" % DESCRIPTION_MIN_LENGTH)


class JobPosting(Base):
    """
    An open position. Owns the candidates who applied to it; deleting the
    posting deletes them too.
    """
    __tablename__ = "jobPostings"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=True)
    deadline = Column(Date, nullable=True)

    # Relationships
    candidates = relationship(
        "Candidate",
        back_populates="job_posting",
        cascade="all, delete-orphan",
        order_by="Candidate.id",
    )

    @validates("description")
    def validate_description(self, key, value):
        if value is not None and not DESCRIPTION_PATTERN.search(value):
            raise ValueError(f"{key} must be at least {DESCRIPTION_MIN_LENGTH} characters")
        return value

    def __repr__(self):
        return f"<JobPosting(id={self.id}, description='{self.description}', deadline={self.deadline})>"
