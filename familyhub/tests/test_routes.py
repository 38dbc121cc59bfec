"""
HTTP-level tests: authentication, status codes and error bodies.
"""
import pytest
from fastapi.testclient import TestClient

from familyhub.core import config
from familyhub.core.database import get_db
from familyhub.main import app


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def headers(user=None):
    result = {"X-API-Key": config.API_KEY}
    if user is not None:
        result["X-User-Id"] = str(user.id)
    return result


class TestAuthentication:

    def test_health_check_is_public(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_missing_api_key(self, client, parent):
        response = client.get("/api/chores", headers={"X-User-Id": str(parent.id)})
        assert response.status_code == 401

    def test_missing_user_identity(self, client):
        response = client.get("/api/chores", headers=headers())
        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized"}

    @pytest.mark.parametrize("user_id", ["999", "not-a-number"])
    def test_unknown_user_identity(self, client, user_id):
        response = client.get("/api/chores", headers={**headers(), "X-User-Id": user_id})
        assert response.status_code == 401


class TestChoreWorkflow:

    def test_assign_complete_verify(self, client, parent, child, sibling):
        response = client.post(
            "/api/chores",
            json={"title": "Vacuum", "points": 10, "allowance_cents": 500},
            headers=headers(parent),
        )
        assert response.status_code == 201
        chore_id = response.json()["id"]

        response = client.post(
            f"/api/chores/{chore_id}/assign", json={"assigned_to": child.id}, headers=headers(parent)
        )
        assert response.status_code == 201
        assignment_id = response.json()["id"]
        assert response.json()["status"] == "pending"

        response = client.post(f"/api/chores/assignments/{assignment_id}/complete", headers=headers(child))
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        response = client.post(f"/api/chores/assignments/{assignment_id}/complete", headers=headers(child))
        assert response.status_code == 400
        assert response.json() == {"detail": "Assignment is not pending"}

        response = client.post(f"/api/chores/assignments/{assignment_id}/verify", headers=headers(sibling))
        assert response.status_code == 403
        assert response.json() == {"detail": "Only parents can verify chores"}

        response = client.post(
            f"/api/chores/assignments/{assignment_id}/verify", json={"approved": True}, headers=headers(parent)
        )
        assert response.status_code == 200
        assert response.json()["status"] == "verified"

        response = client.get("/api/gamification/points", headers=headers(child))
        assert response.status_code == 200
        body = response.json()
        assert body["total_points"] == 10
        assert {t["type"] for t in body["transactions"]} == {"chore_pending", "chore_completed"}

        response = client.get("/api/notifications", params={"unread": True}, headers=headers(child))
        assert any("$5.00" in n["message"] for n in response.json())

    def test_list_assignments_includes_chore(self, client, parent, chore, assign):
        assign(chore)
        response = client.get("/api/chores/assignments", headers=headers(parent))
        assert response.status_code == 200
        assert response.json()[0]["chore"]["title"] == "Dishes"

    def test_verify_unknown_assignment(self, client, parent):
        response = client.post("/api/chores/assignments/999/verify", headers=headers(parent))
        assert response.status_code == 404
        assert response.json() == {"detail": "Assignment not found"}

    def test_invalid_payload_is_400_with_errors(self, client, parent):
        response = client.post(
            "/api/chores", json={"title": "Vacuum", "difficulty": "extreme"}, headers=headers(parent)
        )
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_delete_chore(self, client, parent, chore):
        response = client.delete(f"/api/chores/{chore.id}", headers=headers(parent))
        assert response.status_code == 204


class TestGamificationRoutes:

    def test_leaderboard_rejects_unknown_sort(self, client, child):
        response = client.get("/api/gamification/leaderboard", params={"sortBy": "karma"}, headers=headers(child))
        assert response.status_code == 400

    def test_leaderboard(self, client, parent, child):
        response = client.get("/api/gamification/leaderboard", headers=headers(child))
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_check_achievements_with_empty_catalog(self, client, child):
        response = client.post("/api/gamification/achievements/check", headers=headers(child))
        assert response.status_code == 200
        assert response.json() == {"unlocked_count": 0, "achievements": []}

    def test_reward_redeem_without_points(self, client, parent, child):
        response = client.post(
            "/api/gamification/rewards", json={"title": "Pizza", "points_cost": 50}, headers=headers(parent)
        )
        assert response.status_code == 201

        response = client.post(
            f"/api/gamification/rewards/{response.json()['id']}/redeem", headers=headers(child)
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "Not enough points. You need 50 but have 0"}

    def test_family_members(self, client, parent, child, other_parent):
        response = client.get("/api/family/members", headers=headers(parent))
        assert response.status_code == 200
        assert {m["id"] for m in response.json()} == {parent.id, child.id}

    def test_parent_disables_gamification_for_child(self, client, db_session, parent, child):
        response = client.patch(
            f"/api/family/members/{child.id}/settings",
            json={"gamification_enabled": False},
            headers=headers(parent),
        )
        assert response.status_code == 200
        assert response.json()["gamification_enabled"] is False
        db_session.refresh(child)
        assert child.gamification_enabled is False

    def test_child_cannot_change_settings(self, client, child, sibling):
        response = client.patch(
            f"/api/family/members/{sibling.id}/settings",
            json={"gamification_enabled": False},
            headers=headers(child),
        )
        assert response.status_code == 403
        assert response.json() == {"detail": "Only parents can update member settings"}

    def test_settings_of_other_family_member_not_found(self, client, parent, other_parent):
        response = client.patch(
            f"/api/family/members/{other_parent.id}/settings",
            json={"gamification_enabled": False},
            headers=headers(parent),
        )
        assert response.status_code == 404
