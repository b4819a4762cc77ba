#!/usr/bin/env python3
"""
Unit tests for MatchRepository.

Covers:
- upsert() on the native ON CONFLICT path (SQLite)
- the portable insert-or-update fallback used by other dialects
- find_by_pair() / find_by_resume()
"""

import unittest
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from database.models import ResumeJobMatch
from database.repositories.match import MatchRepository
from tests import FIXED_NOW, add_resume, add_role, make_session_factory, make_test_engine


@pytest.mark.db
class TestMatchRepositoryUpsert(unittest.TestCase):
    """upsert() against a real SQLite database."""

    def setUp(self):
        self.engine = make_test_engine()
        self.session = make_session_factory(self.engine)()
        self.repo = MatchRepository(self.session)
        self.resume = add_resume(self.session, skills=[("Python", 4)])
        self.role = add_role(self.session, "Backend Developer", "Python,SQL")

    def tearDown(self):
        self.session.close()
        self.engine.dispose()

    def _row_count(self) -> int:
        return self.session.execute(select(func.count()).select_from(ResumeJobMatch)).scalar_one()

    def test_upsert_creates_row(self):
        record = self.repo.upsert(
            self.resume.id, self.role.id, Decimal("50.00"), ["Python"], ["Sql"], FIXED_NOW
        )

        self.assertIsNotNone(record.id)
        self.assertEqual(record.resume_id, self.resume.id)
        self.assertEqual(record.job_role_id, self.role.id)
        self.assertEqual(record.match_score, Decimal("50.00"))
        self.assertEqual(record.matched_skills, "Python")
        self.assertEqual(record.missing_skills, "Sql")
        self.assertEqual(self._row_count(), 1)

    def test_upsert_overwrites_existing_pair(self):
        first = self.repo.upsert(
            self.resume.id, self.role.id, Decimal("50.00"), ["Python"], ["Sql"], FIXED_NOW
        )
        later = FIXED_NOW + timedelta(days=1)
        second = self.repo.upsert(
            self.resume.id, self.role.id, Decimal("100.00"), ["Python", "Sql"], [], later
        )

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.match_score, Decimal("100.00"))
        self.assertEqual(second.matched_skills, "Python,Sql")
        self.assertEqual(second.missing_skills, "")
        self.assertEqual(second.matched_at.replace(tzinfo=None), later.replace(tzinfo=None))
        self.assertEqual(self._row_count(), 1)

    def test_upsert_keeps_negative_scores(self):
        record = self.repo.upsert(self.resume.id, self.role.id, Decimal("-7.50"), [], ["Python", "Sql"], FIXED_NOW)
        self.assertEqual(record.match_score, Decimal("-7.50"))

    def test_find_by_resume_ordered_by_id(self):
        other_role = add_role(self.session, "Data Engineer", "SQL")
        self.repo.upsert(self.resume.id, other_role.id, Decimal("0.00"), [], ["Sql"], FIXED_NOW)
        self.repo.upsert(self.resume.id, self.role.id, Decimal("50.00"), ["Python"], ["Sql"], FIXED_NOW)

        rows = self.repo.find_by_resume(self.resume.id)

        self.assertEqual([r.job_role_id for r in rows], [other_role.id, self.role.id])
        self.assertEqual(self.repo.find_by_resume(self.resume.id + 1), [])

    def test_find_by_resumes(self):
        second = add_resume(self.session, skills=[("Go", 3)])
        self.repo.upsert(self.resume.id, self.role.id, Decimal("50.00"), ["Python"], ["Sql"], FIXED_NOW)
        self.repo.upsert(second.id, self.role.id, Decimal("0.00"), [], ["Python", "Sql"], FIXED_NOW)

        rows = self.repo.find_by_resumes([self.resume.id, second.id])

        self.assertEqual([r.resume_id for r in rows], [self.resume.id, second.id])
        self.assertEqual(self.repo.find_by_resumes([second.id]), [rows[1]])
        self.assertEqual(self.repo.find_by_resumes([]), [])

    def test_find_by_pair_missing(self):
        self.assertIsNone(self.repo.find_by_pair(self.resume.id, self.role.id))


class TestMatchRepositoryFallback(unittest.TestCase):
    """Insert-or-update path for dialects without ON CONFLICT."""

    def setUp(self):
        self.mock_db = MagicMock()
        self.mock_db.get_bind.return_value.dialect.name = "mysql"
        self.repo = MatchRepository(self.mock_db)

    def test_inserts_when_pair_is_new(self):
        stored = MagicMock(spec=ResumeJobMatch)
        with patch.object(self.repo, 'find_by_pair', side_effect=[None, stored]):
            result = self.repo.upsert(1, 10, Decimal("34.83"), ["C#"], ["Sql", "Api"], FIXED_NOW)

        self.assertIs(result, stored)
        self.mock_db.begin_nested.assert_called_once()
        added = self.mock_db.add.call_args[0][0]
        self.assertIsInstance(added, ResumeJobMatch)
        self.assertEqual(added.match_score, Decimal("34.83"))
        self.assertEqual(added.matched_skills, "C#")
        self.assertEqual(added.missing_skills, "Sql,Api")
        self.mock_db.execute.assert_not_called()

    def test_updates_when_pair_exists(self):
        existing = ResumeJobMatch(resume_id=1, job_role_id=10, match_score=Decimal("10.00"))
        with patch.object(self.repo, 'find_by_pair', side_effect=[existing, existing]):
            result = self.repo.upsert(1, 10, Decimal("75.00"), ["Python"], [], FIXED_NOW)

        self.assertIs(result, existing)
        self.assertEqual(existing.match_score, Decimal("75.00"))
        self.assertEqual(existing.matched_skills, "Python")
        self.assertEqual(existing.matched_at, FIXED_NOW)
        self.mock_db.add.assert_not_called()
        self.mock_db.flush.assert_called_once()

    def test_lost_insert_race_falls_back_to_update(self):
        winner = ResumeJobMatch(resume_id=1, job_role_id=10, match_score=Decimal("20.00"))
        self.mock_db.add.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with patch.object(self.repo, 'find_by_pair', side_effect=[None, winner, winner]) as mock_find:
            result = self.repo.upsert(1, 10, Decimal("60.00"), ["Go"], ["Rust"], FIXED_NOW)

        self.assertIs(result, winner)
        self.assertEqual(winner.match_score, Decimal("60.00"))
        self.assertEqual(winner.missing_skills, "Rust")
        self.assertEqual(mock_find.call_count, 3)
        self.mock_db.flush.assert_called_once()


if __name__ == '__main__':
    unittest.main()
