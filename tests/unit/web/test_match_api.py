#!/usr/bin/env python3
"""
Unit tests for the match and stats API endpoints.

Endpoints run against a MatchingEngine backed by in-memory SQLite;
error mapping is checked with a mocked engine.
"""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from jobmatch.engine import MatchingEngine
from jobmatch.exceptions import PersistenceFailure
from web.backend.app import app
from web.backend.dependencies import get_match_service
from web.backend.services.match_service import MatchService
from tests import (
    FIXED_NOW,
    add_resume,
    add_role,
    make_session_factory,
    make_test_engine,
    make_uow_factory,
)


@pytest.mark.db
class TestMatchEndpoints(unittest.TestCase):

    def setUp(self):
        self.db_engine = make_test_engine()
        Session = make_session_factory(self.db_engine)
        self.matching_engine = MatchingEngine(uow_factory=make_uow_factory(Session), clock=lambda: FIXED_NOW)

        with Session() as session:
            resume = add_resume(
                session,
                skills=[("C#", 4), ("Javascript", 3)],
                experience=[(FIXED_NOW - timedelta(days=365 * 2), FIXED_NOW)],
            )
            self.resume_id = resume.id
            self.backend_id = add_role(session, "Backend Developer", "C#,SQL,API", description="APIs").id
            self.frontend_id = add_role(session, "Frontend Developer", "Javascript").id
            session.commit()

        app.dependency_overrides[get_match_service] = lambda: MatchService(self.matching_engine)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.db_engine.dispose()

    def test_matches_empty_before_refresh(self):
        response = self.client.get(f"/api/matches/{self.resume_id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "count": 0, "matches": []})

    def test_refresh_then_get(self):
        response = self.client.post(f"/api/matches/{self.resume_id}/refresh")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "message": "Matches refreshed successfully"})

        data = self.client.get(f"/api/matches/{self.resume_id}").json()
        self.assertEqual(data["count"], 2)

        top, second = data["matches"]
        self.assertEqual(top["job_role_id"], self.frontend_id)
        self.assertEqual(top["match_score"], 100.0)
        self.assertEqual(second["job_role_id"], self.backend_id)
        self.assertEqual(second["job_role_name"], "Backend Developer")
        self.assertEqual(second["job_role_description"], "APIs")
        self.assertEqual(second["match_score"], 34.83)
        self.assertEqual(second["matched_skills"], ["C#"])
        self.assertEqual(second["missing_skills"], ["Sql", "Api"])
        self.assertIsNotNone(second["matched_at"])

    def test_refresh_twice_keeps_one_match_per_role(self):
        self.client.post(f"/api/matches/{self.resume_id}/refresh")
        self.client.post(f"/api/matches/{self.resume_id}/refresh")

        data = self.client.get(f"/api/matches/{self.resume_id}").json()
        self.assertEqual(data["count"], 2)

    def test_refresh_unknown_resume_is_not_an_error(self):
        response = self.client.post("/api/matches/9999/refresh")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/matches/9999").json()["count"], 0)

    def test_stats(self):
        self.client.post(f"/api/matches/{self.resume_id}/refresh")

        response = self.client.get(f"/api/stats/{self.resume_id}", params={"top": 1})

        self.assertEqual(response.status_code, 200)
        stats = response.json()["stats"]
        self.assertEqual(stats["resume_id"], self.resume_id)
        self.assertEqual(stats["total_matches"], 2)
        self.assertEqual(stats["average_score"], 67.42)
        self.assertEqual(len(stats["top_matches"]), 1)
        self.assertEqual(stats["top_matches"][0]["job_role_id"], self.frontend_id)

    def test_stats_unknown_resume(self):
        response = self.client.get("/api/stats/9999")

        self.assertEqual(response.status_code, 404)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["type"], "ResumeNotFound")

    def test_user_stats(self):
        self.client.post(f"/api/matches/{self.resume_id}/refresh")

        response = self.client.get("/api/stats/user/user_1", params={"top": 1})

        self.assertEqual(response.status_code, 200)
        stats = response.json()["stats"]
        self.assertEqual(stats["user_id"], "user_1")
        self.assertEqual(stats["total_resumes"], 1)
        self.assertEqual(stats["total_matches"], 2)
        self.assertEqual(stats["average_score"], 67.42)
        self.assertEqual(len(stats["top_matches"]), 1)
        self.assertEqual(stats["top_matches"][0]["job_role_id"], self.frontend_id)
        self.assertEqual(stats["top_matches"][0]["resume_title"], "Software Engineer")
        self.assertEqual(stats["skill_distribution"], [
            {"skill_name": "C#", "count": 1},
            {"skill_name": "Javascript", "count": 1},
        ])

    def test_user_stats_unknown_user(self):
        response = self.client.get("/api/stats/user/nobody")

        self.assertEqual(response.status_code, 200)
        stats = response.json()["stats"]
        self.assertEqual(stats["total_resumes"], 0)
        self.assertEqual(stats["top_matches"], [])
        self.assertEqual(stats["skill_distribution"], [])

    def test_invalid_resume_id(self):
        response = self.client.get("/api/matches/not-a-number")
        self.assertEqual(response.status_code, 422)

    def test_invalid_top(self):
        response = self.client.get(f"/api/stats/{self.resume_id}", params={"top": 0})
        self.assertEqual(response.status_code, 422)


class TestErrorMapping(unittest.TestCase):

    def setUp(self):
        self.matching_engine = MagicMock(spec=MatchingEngine)
        app.dependency_overrides[get_match_service] = lambda: MatchService(self.matching_engine)
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_persistence_failure_is_503(self):
        self.matching_engine.refresh.side_effect = PersistenceFailure("Could not save matches for resume 1")

        response = self.client.post("/api/matches/1/refresh")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {
            "success": False,
            "error": "Could not save matches for resume 1",
            "type": "PersistenceFailure"
        })

    def test_unexpected_error_is_500(self):
        self.matching_engine.get_existing.side_effect = RuntimeError("boom")

        response = self.client.get("/api/matches/1")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["type"], "InternalError")

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


if __name__ == '__main__':
    unittest.main()
