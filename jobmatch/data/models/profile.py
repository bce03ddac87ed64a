"""
Candidate profile model.

A read-only projection of a user's academic record as stored by the
user-profile subsystem.
"""

from typing import Optional

from pydantic import Field, field_validator

from .base import BaseDocument, EmbeddedModel


class CandidateProfile(BaseDocument):
    """
    Qualification, stream, graduation year and GPA of one candidate.

    Every field has a default so that partially filled profiles still
    load and can be scored.
    """

    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    qualification: str = ""  # e.g. "B.Tech"
    stream: str = ""  # e.g. "CSE"
    graduation_year: Optional[int] = None
    gpa_or_percentage: Optional[float] = None

    @field_validator("qualification", "stream", mode="before")
    @classmethod
    def normalize_text(cls, v: Optional[str]) -> str:
        """Treat missing values as empty and trim whitespace."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("gpa_or_percentage")
    @classmethod
    def validate_gpa(cls, v: Optional[float]) -> Optional[float]:
        """CGPA (0-10) or percentage (0-100)."""
        if v is not None and (v < 0 or v > 100):
            raise ValueError("CGPA/percentage must be between 0 and 100")
        return v

    @property
    def subject_id(self) -> str:
        """Identifier reported in reverse-match results."""
        return self.user_id or self.id_str

    def summary(self) -> "ProfileSummary":
        """Build the summary attached to reverse-match results."""
        return ProfileSummary(
            qualification=self.qualification,
            stream=self.stream,
            graduation_year=self.graduation_year,
            gpa=self.gpa_or_percentage,
        )

    class Settings:
        """MongoDB collection settings."""

        name = "user_profiles"
        indexes = [
            "qualification",
            "stream",
            "graduation_year",
            "gpa_or_percentage",
        ]


class ProfileSummary(EmbeddedModel):
    """Academic fields shown alongside a reverse match."""

    qualification: str = ""
    stream: str = ""
    graduation_year: Optional[int] = None
    gpa: Optional[float] = Field(default=None, ge=0)
