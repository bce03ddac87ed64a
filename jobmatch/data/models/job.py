"""
Job posting data models.

Defines job listings with their eligibility rules, and the structured
query the engine hands to a job store.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from jobmatch.utils.constants import JobType, WorkMode

from .base import BaseDocument, EmbeddedModel

_SALARY_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def parse_salary_amount(text: Optional[str]) -> float:
    """
    Extract the leading numeric amount from a salary display string.

    "₹6,00,000 per annum" -> 600000.0, "12 LPA" -> 12.0. Strings without
    digits and missing values give 0.0.
    """
    if not text:
        return 0.0
    match = _SALARY_NUMBER.search(text.replace(",", ""))
    if not match:
        return 0.0
    return float(match.group())


class JobEligibility(EmbeddedModel):
    """Eligibility rule attached to a job posting."""

    qualifications: list[str] = Field(..., min_length=1)
    streams: list[str] = Field(..., min_length=1)
    graduation_years: list[int] = Field(..., min_length=1)
    min_gpa: Optional[float] = None  # None = no GPA floor

    @field_validator("qualifications", "streams")
    @classmethod
    def strip_values(cls, v: list[str]) -> list[str]:
        """Trim surrounding whitespace from every entry."""
        return [item.strip() for item in v]

    @field_validator("min_gpa")
    @classmethod
    def validate_min_gpa(cls, v: Optional[float]) -> Optional[float]:
        """Validate GPA floor is non-negative."""
        if v is not None and v < 0:
            raise ValueError("Minimum CGPA cannot be negative")
        return v

    @property
    def earliest_graduation_year(self) -> Optional[int]:
        """Lowest accepted graduation year."""
        return min(self.graduation_years) if self.graduation_years else None


class JobListing(BaseDocument):
    """
    Main job posting model.

    Active listings whose deadline has not passed form the candidate
    pool for forward and advanced matching.
    """

    title: str = Field(..., min_length=1, max_length=200)
    organization: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None

    type: JobType
    work_mode: WorkMode
    eligibility: JobEligibility

    posted_at: datetime
    application_deadline: datetime
    application_link: Optional[str] = None

    salary: Optional[str] = None
    stipend: Optional[str] = None

    is_active: bool = True

    @field_validator("posted_at", "application_deadline")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """Store timestamps as naive UTC, the form the engine clock uses."""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @property
    def compensation(self) -> Optional[str]:
        """Salary for jobs, stipend for internships."""
        return self.salary or self.stipend

    @property
    def compensation_amount(self) -> float:
        """Numeric compensation used for salary sorting and bounds."""
        return parse_salary_amount(self.compensation)

    def is_open(self, now: datetime) -> bool:
        """Check if the listing is active and still accepting applications."""
        return self.is_active and self.application_deadline > now

    def days_since_posted(self, now: datetime) -> int:
        """Whole days elapsed since the listing was posted."""
        return (now - self.posted_at).days

    class Settings:
        """MongoDB collection settings."""

        name = "jobs"
        indexes = [
            "is_active",
            "type",
            "work_mode",
            "application_deadline",
            "posted_at",
            "eligibility.qualifications",
            "eligibility.streams",
        ]


class JobQuery(BaseModel):
    """
    Filters for fetching active listings from a job store.

    Empty lists mean "no restriction". All set filters are ANDed.
    """

    job_types: list[JobType] = Field(default_factory=list)
    work_modes: list[WorkMode] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    streams: list[str] = Field(default_factory=list)
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    deadline_after: Optional[datetime] = None
    skip: int = Field(default=0, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)

    @property
    def has_salary_bounds(self) -> bool:
        return self.min_salary is not None or self.max_salary is not None

    def salary_in_bounds(self, amount: float) -> bool:
        """Check a parsed compensation amount against the salary bounds."""
        if self.min_salary is not None and amount < self.min_salary:
            return False
        if self.max_salary is not None and amount > self.max_salary:
            return False
        return True

    def matches(self, listing: JobListing) -> bool:
        """Evaluate every filter except pagination against one listing."""
        if not listing.is_active:
            return False
        if self.deadline_after and listing.application_deadline <= self.deadline_after:
            return False
        if self.job_types and listing.type not in self.job_types:
            return False
        if self.work_modes and listing.work_mode not in self.work_modes:
            return False
        if self.qualifications and not set(self.qualifications) & set(listing.eligibility.qualifications):
            return False
        if self.streams and not set(self.streams) & set(listing.eligibility.streams):
            return False
        if self.has_salary_bounds and not self.salary_in_bounds(listing.compensation_amount):
            return False
        return True
