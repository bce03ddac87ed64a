"""
Tests for MatchingEngine.matching_statistics.
"""

from unittest.mock import MagicMock

import pytest

from jobmatch.core.matching import MatchingEngine
from jobmatch.data.repositories import InMemoryJobStore
from jobmatch.utils.config import MatchingSettings
from jobmatch.utils.constants import MatchingEfficiency


class TestMatchingStatistics:
    def test_empty_population(self, make_engine, make_job):
        engine = make_engine(profiles=[], jobs=[make_job(), make_job(), make_job(is_active=False)])

        stats = engine.matching_statistics()

        assert stats.total_users == 0
        assert stats.total_jobs == 2
        assert stats.top_qualifications == []
        assert stats.top_streams == []

    def test_counts_and_distributions(self, make_engine, make_profile, now):
        profiles = [
            make_profile(qualification="B.Tech", stream="CSE"),
            make_profile(qualification="B.Tech", stream="ECE"),
            make_profile(qualification="B.Tech", stream="CSE"),
            make_profile(qualification="MCA", stream="CSE"),
            make_profile(qualification=None, stream=None),
        ]
        engine = make_engine(profiles=profiles)

        stats = engine.matching_statistics()

        assert stats.total_users == 5
        assert [(f.value, f.count) for f in stats.top_qualifications] == [("B.Tech", 3), ("MCA", 1)]
        assert [(f.value, f.count) for f in stats.top_streams] == [("CSE", 3), ("ECE", 1)]
        assert stats.last_updated == now

    def test_placeholder_fields(self, make_engine):
        stats = make_engine().matching_statistics()
        assert stats.average_match_score == 75
        assert stats.matching_efficiency == MatchingEfficiency.HIGH

    def test_top_k_from_settings(self, make_engine, make_profile):
        profiles = [make_profile(qualification=q) for q in ["A", "B", "B", "C", "C", "C"]]
        engine = make_engine(profiles=profiles, settings=MatchingSettings(statistics_top_k=2))

        stats = engine.matching_statistics()

        assert [f.value for f in stats.top_qualifications] == ["C", "B"]

    def test_store_failure_propagates(self):
        profile_store = MagicMock()
        profile_store.count_all.side_effect = ConnectionError("db down")
        engine = MatchingEngine(profile_store, InMemoryJobStore(), settings=MatchingSettings())

        with pytest.raises(ConnectionError):
            engine.matching_statistics()
