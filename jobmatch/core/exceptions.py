"""
Errors raised by the matching engine.

Only missing subjects are errors. An empty result is a normal outcome,
and store failures propagate unchanged.
"""


class MatchingError(Exception):
    """Base class for matching engine errors."""


class ProfileNotFoundError(MatchingError, LookupError):
    """The requested candidate profile does not exist."""

    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__(f"User profile not found: {profile_id}")


class JobNotFoundError(MatchingError, LookupError):
    """The requested job listing does not exist."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
