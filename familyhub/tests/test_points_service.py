"""
Tests for PointsService.

Tests cover:
1. Ledger writes and balance updates
2. Points summary
3. Leaderboard ranking
4. Ledger reconciliation
"""
import pytest
from datetime import datetime

from familyhub.exceptions import UserNotFoundException, ValidationException
from familyhub.modules.chores.settlement import VerificationService
from familyhub.modules.points.models import PointTransaction
from familyhub.modules.points.service import PointsService
from familyhub.modules.streaks.models import UserStreak
from familyhub.shared.constants import TRANSACTION_CHORE_COMPLETED, TRANSACTION_CHORE_PENDING


class TestAwardPoints:

    def test_award_writes_ledger_and_balance(self, db_session, child):
        service = PointsService(db_session)
        service.award_points(child.id, 15, TRANSACTION_CHORE_COMPLETED, "Verified: Dishes")
        db_session.commit()

        assert service.get_balance(child.id) == 15
        assert db_session.query(PointTransaction).one().amount == 15

    def test_increments_are_relative(self, db_session, child):
        """Two awards against a stale in-memory balance both count"""
        service = PointsService(db_session)
        service.award_points(child.id, 10, TRANSACTION_CHORE_COMPLETED, "a")
        service.award_points(child.id, 5, TRANSACTION_CHORE_COMPLETED, "b")
        db_session.commit()

        assert service.get_balance(child.id) == 15

    def test_record_transaction_leaves_balance(self, db_session, child):
        service = PointsService(db_session)
        service.record_transaction(child.id, 10, TRANSACTION_CHORE_PENDING, "Completed: Dishes (pending verification)")
        db_session.commit()

        assert service.get_balance(child.id) == 0

    def test_award_to_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundException):
            PointsService(db_session).award_points(4242, 10, TRANSACTION_CHORE_COMPLETED, "ghost")


class TestSummary:

    def test_summary_newest_first_with_limit(self, db_session, child):
        service = PointsService(db_session)
        for amount in (1, 2, 3):
            service.award_points(child.id, amount, TRANSACTION_CHORE_COMPLETED, f"+{amount}")
        db_session.commit()

        summary = service.get_summary(child, limit=2)

        assert summary.total_points == 6
        assert [t.amount for t in summary.transactions] == [3, 2]


class TestLeaderboard:

    @pytest.fixture
    def ranked_family(self, db_session, parent, child, sibling):
        child.gamification_points = 30
        sibling.gamification_points = 50
        db_session.add(UserStreak(user_id=child.id, current_streak=4, longest_streak=6))
        db_session.add(UserStreak(user_id=sibling.id, current_streak=1, longest_streak=9))
        db_session.commit()

    def test_sorted_by_points(self, db_session, parent, child, sibling, other_parent, ranked_family):
        board = PointsService(db_session).get_leaderboard(child, child.family_id)

        assert [e.user_id for e in board] == [sibling.id, child.id, parent.id]
        assert [e.rank for e in board] == [1, 2, 3]
        assert [e.is_current_user for e in board] == [False, True, False]
        assert board[2].current_streak == 0

    def test_sorted_by_streak(self, db_session, parent, child, sibling, ranked_family):
        board = PointsService(db_session).get_leaderboard(child, child.family_id, "streak")

        assert [e.user_id for e in board] == [child.id, sibling.id, parent.id]
        assert board[0].longest_streak == 6

    def test_invalid_sort(self, db_session, child):
        with pytest.raises(ValidationException):
            PointsService(db_session).get_leaderboard(child, child.family_id, "karma")


class TestReconciliation:

    def test_settled_chore_has_no_drift(self, db_session, parent, child, chore, completed_assignment):
        assignment = completed_assignment(chore)
        VerificationService(db_session).verify_assignment(parent, assignment.id, now=datetime(2026, 3, 1, 18))

        result = PointsService(db_session).reconcile(child)

        assert result.balance == 10
        assert result.settled_ledger_total == 10
        assert result.pending_ledger_total == 10
        assert result.drift == 0

    def test_manual_balance_edit_is_reported(self, db_session, parent, child, sibling):
        sibling.gamification_points = 7
        db_session.commit()

        drifted = PointsService(db_session).reconcile_all()

        assert [r.user_id for r in drifted] == [sibling.id]
        assert drifted[0].drift == 7

    def test_reconcile_never_changes_balance(self, db_session, child):
        child.gamification_points = 7
        db_session.commit()
        service = PointsService(db_session)

        service.reconcile_all()

        assert service.get_balance(child.id) == 7
