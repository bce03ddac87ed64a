"""
Data layer for the jobmatch engine.

Submodules:
- models: Pydantic records for profiles, job postings and match results
- repositories: ProfileStore / JobStore contracts and their implementations
- database: MongoDB connection management
"""
