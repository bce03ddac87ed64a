"""
Tests for jobmatch.cli: commands run against a JSON data file.
"""

import json
from datetime import timedelta

import pytest
from bson import ObjectId
from typer.testing import CliRunner

from jobmatch.cli import app
from jobmatch.data.models import utc_now

runner = CliRunner()

PROFILE_ID = str(ObjectId())
LOW_GPA_PROFILE_ID = str(ObjectId())
REMOTE_JOB_ID = str(ObjectId())
STRICT_JOB_ID = str(ObjectId())


def _invoke(*args):
    return runner.invoke(app, list(args), env={"COLUMNS": "200"})


@pytest.fixture
def data_file(tmp_path):
    now = utc_now()
    payload = {
        "profiles": [
            {
                "_id": PROFILE_ID,
                "user_id": "asha",
                "name": "Asha",
                "qualification": "B.Tech",
                "stream": "CSE",
                "graduation_year": now.year - 1,
                "gpa_or_percentage": 8.4,
            },
            {
                "_id": LOW_GPA_PROFILE_ID,
                "user_id": "ravi",
                "name": "Ravi",
                "qualification": "B.Tech",
                "stream": "CSE",
                "graduation_year": now.year - 1,
                "gpa_or_percentage": 6.0,
            },
        ],
        "jobs": [
            {
                "_id": REMOTE_JOB_ID,
                "title": "Platform",
                "organization": "Acme",
                "type": "job",
                "work_mode": "remote",
                "eligibility": {
                    "qualifications": ["B.Tech"],
                    "streams": ["CSE"],
                    "graduation_years": [now.year - 1],
                },
                "posted_at": (now - timedelta(days=2)).isoformat(),
                "application_deadline": (now + timedelta(days=30)).isoformat(),
                "salary": "₹8,00,000 per annum",
            },
            {
                "_id": STRICT_JOB_ID,
                "title": "Research",
                "organization": "Lab",
                "type": "internship",
                "work_mode": "onsite",
                "eligibility": {
                    "qualifications": ["B.Tech"],
                    "streams": ["CSE"],
                    "graduation_years": [now.year - 1],
                    "min_gpa": 8.0,
                },
                "posted_at": (now - timedelta(days=20)).isoformat(),
                "application_deadline": (now + timedelta(days=10)).isoformat(),
                "stipend": "20000/month",
            },
        ],
    }
    path = tmp_path / "data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestCli:
    def test_version(self):
        result = _invoke("version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_info(self):
        result = _invoke("info")
        assert result.exit_code == 0
        assert "user_profiles" in result.output

    def test_recommend(self, data_file):
        result = _invoke("recommend", PROFILE_ID, "--data", data_file, "--reasons")
        assert result.exit_code == 0
        assert "Platform" in result.output
        assert "Research" in result.output
        assert "Perfect match bonus" in result.output

    def test_recommend_work_mode_filter(self, data_file):
        result = _invoke("recommend", PROFILE_ID, "--data", data_file, "--work-mode", "onsite")
        assert result.exit_code == 0
        assert "Research" in result.output
        assert "Platform" not in result.output

    def test_recommend_unknown_profile(self, data_file):
        result = _invoke("recommend", str(ObjectId()), "--data", data_file)
        assert result.exit_code == 1
        assert "User profile not found" in result.output

    def test_matching_jobs(self, data_file):
        result = _invoke("matching-jobs", PROFILE_ID, "--data", data_file, "--limit", "1")
        assert result.exit_code == 0
        assert "Matching Jobs (1)" in result.output

    def test_match_users_applies_gpa_gate(self, data_file):
        result = _invoke("match-users", STRICT_JOB_ID, "--data", data_file)
        assert result.exit_code == 0
        assert "Asha" in result.output
        assert "Ravi" not in result.output

    def test_match_users_unknown_job(self, data_file):
        result = _invoke("match-users", str(ObjectId()), "--data", data_file)
        assert result.exit_code == 1
        assert "Job not found" in result.output

    def test_advanced_sorted_by_salary(self, data_file):
        result = _invoke("advanced", PROFILE_ID, "--data", data_file, "--sort-by", "salary")
        assert result.exit_code == 0
        assert "sorted by salary" in result.output
        assert result.output.index("Platform") < result.output.index("Research")

    def test_advanced_no_results(self, data_file):
        result = _invoke("advanced", PROFILE_ID, "--data", data_file, "--stream", "ME")
        assert result.exit_code == 0
        assert "No matching jobs found" in result.output

    def test_stats(self, data_file):
        result = _invoke("stats", "--data", data_file)
        assert result.exit_code == 0
        assert "B.Tech: 2" in result.output
        assert "CSE: 2" in result.output

    def test_missing_data_file(self, tmp_path):
        result = _invoke("stats", "--data", str(tmp_path / "nope.json"))
        assert result.exit_code == 1
        assert "Data file not found" in result.output

    def test_malformed_json_data_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = _invoke("stats", "--data", str(path))

        assert result.exit_code == 1
        assert "Invalid data file" in result.output

    def test_invalid_document_in_data_file(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({
            "profiles": [],
            "jobs": [{"title": "Platform", "organization": "Acme", "work_mode": "moon"}],
        }), encoding="utf-8")

        result = _invoke("recommend", PROFILE_ID, "--data", str(path))

        assert result.exit_code == 1
        assert "Invalid data file" in result.output
        assert "work_mode" in result.output
