"""
Tests for RewardService.

Tests cover:
1. Reward creation
2. Redemption balance and stock checks
3. Fulfillment and cancellation
"""
import pytest

from familyhub.exceptions import (
    AuthorizationDeniedException,
    PreconditionFailedException,
    RedemptionNotFoundException,
    RewardNotFoundException,
)
from familyhub.modules.notifications.models import Notification
from familyhub.modules.points.models import PointTransaction
from familyhub.modules.rewards.models import RewardRedemption
from familyhub.modules.rewards.schemas import RedemptionFulfill, RewardCreate
from familyhub.modules.rewards.service import RewardService
from familyhub.shared.constants import (
    NOTIFICATION_REWARD_CANCELLED,
    NOTIFICATION_REWARD_FULFILLED,
    NOTIFICATION_REWARD_REDEEMED,
    REDEMPTION_STATUS_CANCELLED,
    REDEMPTION_STATUS_FULFILLED,
    REDEMPTION_STATUS_PENDING,
    TRANSACTION_REWARD_REDEEMED,
)


@pytest.fixture
def make_reward(db_session, parent):
    def _make(title="Movie night", points_cost=30, stock_limit=None):
        return RewardService(db_session).create_reward(
            parent, RewardCreate(title=title, points_cost=points_cost, stock_limit=stock_limit)
        )
    return _make


@pytest.fixture
def rich_child(db_session, child):
    child.gamification_points = 100
    db_session.commit()
    return child


def _balance(db_session, user):
    db_session.refresh(user)
    return user.gamification_points


class TestCreateReward:

    def test_stock_remaining_starts_at_limit(self, make_reward, family):
        reward = make_reward(stock_limit=3)
        assert reward.family_id == family.id
        assert reward.stock_remaining == 3
        assert reward.is_available is True
        assert reward.category == "privilege"

    def test_unlimited_stock(self, make_reward):
        assert make_reward().stock_remaining is None

    def test_child_cannot_create(self, db_session, child):
        with pytest.raises(AuthorizationDeniedException):
            RewardService(db_session).create_reward(child, RewardCreate(title="Candy", points_cost=1))

    def test_list_available_only(self, db_session, parent, make_reward):
        kept = make_reward(title="Ice cream", points_cost=10)
        hidden = make_reward(title="Trip", points_cost=500)
        hidden.is_available = False
        db_session.commit()
        service = RewardService(db_session)

        assert [r.id for r in service.list_rewards(parent)] == [kept.id, hidden.id]
        assert [r.id for r in service.list_rewards(parent, available_only=True)] == [kept.id]


class TestRedeemReward:

    def test_redeem_deducts_and_records(self, db_session, parent, rich_child, make_reward):
        reward = make_reward(points_cost=30, stock_limit=2)

        redemption = RewardService(db_session).redeem_reward(rich_child, reward.id)

        assert redemption.status == REDEMPTION_STATUS_PENDING
        assert redemption.points_spent == 30
        assert _balance(db_session, rich_child) == 70

        entry = db_session.query(PointTransaction).one()
        assert entry.type == TRANSACTION_REWARD_REDEEMED
        assert entry.amount == -30
        assert entry.reward_redemption_id == redemption.id
        assert entry.description == "Redeemed: Movie night"

        db_session.refresh(reward)
        assert reward.stock_remaining == 1

    def test_guardians_and_redeemer_are_notified(self, db_session, parent, admin, rich_child, make_reward):
        reward = make_reward()
        RewardService(db_session).redeem_reward(rich_child, reward.id)

        recipients = {
            n.user_id for n in db_session.query(Notification).filter(
                Notification.type == NOTIFICATION_REWARD_REDEEMED
            )
        }
        assert recipients == {parent.id, admin.id, rich_child.id}

    def test_not_enough_points(self, db_session, child, make_reward):
        child.gamification_points = 20
        db_session.commit()
        reward = make_reward(points_cost=30)

        with pytest.raises(PreconditionFailedException) as exc_info:
            RewardService(db_session).redeem_reward(child, reward.id)

        assert exc_info.value.message == "Not enough points. You need 30 but have 20"
        assert _balance(db_session, child) == 20
        assert db_session.query(RewardRedemption).count() == 0

    def test_exact_balance_is_enough(self, db_session, child, make_reward):
        child.gamification_points = 30
        db_session.commit()
        reward = make_reward(points_cost=30)

        RewardService(db_session).redeem_reward(child, reward.id)

        assert _balance(db_session, child) == 0

    def test_gamification_disabled(self, db_session, rich_child, make_reward):
        rich_child.gamification_enabled = False
        db_session.commit()
        reward = make_reward(points_cost=30)

        with pytest.raises(PreconditionFailedException) as exc_info:
            RewardService(db_session).redeem_reward(rich_child, reward.id)

        assert exc_info.value.message == "Gamification is not enabled for this user"
        assert _balance(db_session, rich_child) == 100
        assert db_session.query(RewardRedemption).count() == 0

    def test_out_of_stock(self, db_session, rich_child, make_reward):
        reward = make_reward(points_cost=10, stock_limit=1)
        service = RewardService(db_session)
        service.redeem_reward(rich_child, reward.id)

        with pytest.raises(PreconditionFailedException) as exc_info:
            service.redeem_reward(rich_child, reward.id)

        assert exc_info.value.message == "This reward is out of stock"
        assert _balance(db_session, rich_child) == 90

    def test_unavailable(self, db_session, rich_child, make_reward):
        reward = make_reward()
        reward.is_available = False
        db_session.commit()

        with pytest.raises(PreconditionFailedException) as exc_info:
            RewardService(db_session).redeem_reward(rich_child, reward.id)
        assert exc_info.value.message == "This reward is no longer available"

    def test_reward_of_other_family(self, db_session, other_parent, make_reward):
        reward = make_reward()
        with pytest.raises(RewardNotFoundException):
            RewardService(db_session).redeem_reward(other_parent, reward.id)


class TestFulfillRedemption:

    @pytest.fixture
    def redemption(self, db_session, rich_child, make_reward):
        return RewardService(db_session).redeem_reward(rich_child, make_reward().id)

    def test_fulfill(self, db_session, parent, rich_child, redemption):
        result = RewardService(db_session).fulfill_redemption(parent, redemption.id)

        assert result.status == REDEMPTION_STATUS_FULFILLED
        assert result.fulfilled_by == parent.id
        assert result.fulfilled_at is not None
        assert db_session.query(Notification).filter(
            Notification.user_id == rich_child.id,
            Notification.type == NOTIFICATION_REWARD_FULFILLED
        ).count() == 1

    def test_cancel_does_not_refund(self, db_session, parent, rich_child, redemption):
        result = RewardService(db_session).fulfill_redemption(
            parent, redemption.id, RedemptionFulfill(fulfilled=False)
        )

        assert result.status == REDEMPTION_STATUS_CANCELLED
        assert _balance(db_session, rich_child) == 70
        assert db_session.query(Notification).filter(
            Notification.type == NOTIFICATION_REWARD_CANCELLED
        ).count() == 1

    def test_only_pending_can_be_fulfilled(self, db_session, parent, redemption):
        service = RewardService(db_session)
        service.fulfill_redemption(parent, redemption.id)

        with pytest.raises(PreconditionFailedException):
            service.fulfill_redemption(parent, redemption.id)

    def test_child_cannot_fulfill(self, db_session, rich_child, redemption):
        with pytest.raises(AuthorizationDeniedException):
            RewardService(db_session).fulfill_redemption(rich_child, redemption.id)

    def test_other_family_sees_not_found(self, db_session, other_parent, redemption):
        with pytest.raises(RedemptionNotFoundException):
            RewardService(db_session).fulfill_redemption(other_parent, redemption.id)

    def test_list_filters(self, db_session, parent, rich_child, redemption):
        service = RewardService(db_session)
        assert [r.id for r in service.list_redemptions(parent)] == [redemption.id]
        assert service.list_redemptions(parent, status=REDEMPTION_STATUS_FULFILLED) == []
        assert service.list_redemptions(parent, user_id=parent.id) == []
