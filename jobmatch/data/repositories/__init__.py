"""
Data access layer for the jobmatch engine.

Provides the ProfileStore / JobStore contracts, their MongoDB
repositories and in-memory implementations.
"""

from .base import BaseRepository, JobStore, ProfileStore
from .job_repository import JobRepository
from .memory import InMemoryJobStore, InMemoryProfileStore, load_memory_stores
from .profile_repository import ProfileRepository

__all__ = [
    # Contracts
    "BaseRepository",
    "JobStore",
    "ProfileStore",
    # MongoDB
    "JobRepository",
    "ProfileRepository",
    # In-memory
    "InMemoryJobStore",
    "InMemoryProfileStore",
    "load_memory_stores",
]
