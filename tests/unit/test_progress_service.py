"""Unit tests for ProgressService (habitquest/services/progress_service.py)"""
import pytest


@pytest.fixture
def level_rewards(rewards_store, test_user_id):
    """Level 2 at 200 XP and level 3 at 500 XP"""
    return [
        rewards_store.add_reward({"name": "Coffee out", "level": 2, "xp_required": 200, "user_id": test_user_id}),
        rewards_store.add_reward({"name": "New book", "level": 3, "xp_required": 500, "user_id": test_user_id}),
    ]


def earn(activity_store, activity, days):
    for day in days:
        activity_store.complete_activity(activity.id, day, activity.xp)


# ============================================================================
# Progress Summary
# ============================================================================

def test_progress_summary_new_user(progress_service, test_user_id):
    summary = progress_service.get_progress_summary(test_user_id)

    assert summary == {
        "user_id": test_user_id,
        "total_xp": 0,
        "today_xp": 0,
        "current_level": 1,
        "next_reward": None,
        "xp_to_next_reward": 0,
        "next_reward_progress": 100.0,
        "claimable_rewards": [],
    }


def test_progress_summary(progress_service, activity_store, read_activity, level_rewards, test_user_id):
    earn(activity_store, read_activity, ["2024-01-01", "2024-01-02", "2024-01-02", "2024-01-03", "2024-01-03"])

    summary = progress_service.get_progress_summary(test_user_id, as_of="2024-01-03")

    assert summary["total_xp"] == 250
    assert summary["today_xp"] == 100
    assert summary["current_level"] == 2
    assert summary["next_reward"]["name"] == "New book"
    assert summary["xp_to_next_reward"] == 250
    assert summary["next_reward_progress"] == 50.0
    assert [r["name"] for r in summary["claimable_rewards"]] == ["Coffee out"]


def test_progress_summary_defaults_to_clock_day(progress_service, activity_store, read_activity, test_user_id):
    earn(activity_store, read_activity, ["2024-01-03"])

    assert progress_service.get_progress_summary(test_user_id)["today_xp"] == 50


def test_progress_summary_zero_threshold_with_negative_xp(progress_service, activity_store, rewards_store, test_user_id):
    """Test a free reward out of reach of negative XP reports 0 progress"""
    penalty = activity_store.add_activity({"name": "Skipped", "xp": -5, "user_id": test_user_id})
    activity_store.complete_activity(penalty.id, "2024-01-03", penalty.xp)
    rewards_store.add_reward({"name": "Freebie", "level": 1, "xp_required": 0, "user_id": test_user_id})

    summary = progress_service.get_progress_summary(test_user_id)

    assert summary["total_xp"] == -5
    assert summary["next_reward"]["name"] == "Freebie"
    assert summary["xp_to_next_reward"] == 5
    assert summary["next_reward_progress"] == 0.0


# ============================================================================
# Completing Activities
# ============================================================================

def test_complete_activity_awards_xp(progress_service, read_activity):
    result = progress_service.complete_activity(read_activity.id, as_of="2024-01-03")

    assert result["success"] is True
    assert result["xp_awarded"] == 50
    assert result["today_xp"] == 50
    assert result["total_xp"] == 50
    assert result["current_streak"] == 1
    assert result["leveled_up"] is False
    assert result["message"] == "Earned 50 XP from Read!"


def test_complete_activity_reports_streak(progress_service, activity_store, read_activity):
    earn(activity_store, read_activity, ["2024-01-01", "2024-01-02"])

    result = progress_service.complete_activity(read_activity.id, as_of="2024-01-03")

    assert result["current_streak"] == 3
    assert "3-day streak" in result["message"]


def test_complete_activity_unknown(progress_service):
    result = progress_service.complete_activity("missing")

    assert result["success"] is False
    assert result["message"] == "Activity not found"


def test_complete_activity_respects_daily_cap(progress_service, activity_store, test_user_id):
    """Test a capped core activity is refused once the cap is used up"""
    stretch = activity_store.add_activity({
        "name": "Stretch", "xp": 10, "type": "core", "daily_cap": 2, "user_id": test_user_id,
    })

    first = progress_service.complete_activity(stretch.id, as_of="2024-01-03")
    second = progress_service.complete_activity(stretch.id, as_of="2024-01-03")
    third = progress_service.complete_activity(stretch.id, as_of="2024-01-03")
    next_day = progress_service.complete_activity(stretch.id, as_of="2024-01-04")

    assert first["success"] and second["success"]
    assert third["success"] is False
    assert third["message"] == "Daily cap reached for Stretch"
    assert third["today_xp"] == 20
    assert next_day["success"] is True
    assert activity_store.get_total_xp_for_user(test_user_id) == 30


def test_bonus_activity_ignores_cap(progress_service, activity_store, test_user_id):
    bonus = activity_store.add_activity({
        "name": "Extra walk", "xp": 5, "type": "bonus", "daily_cap": 1, "user_id": test_user_id,
    })

    results = [progress_service.complete_activity(bonus.id, as_of="2024-01-03") for _ in range(3)]

    assert all(r["success"] for r in results)


def test_complete_activity_level_up(progress_service, activity_store, read_activity, level_rewards):
    earn(activity_store, read_activity, ["2024-01-01", "2024-01-01", "2024-01-02"])

    result = progress_service.complete_activity(read_activity.id, as_of="2024-01-03")

    assert result["total_xp"] == 200
    assert result["leveled_up"] is True
    assert result["new_level"] == 2
    assert "Level up: 1 → 2" in result["message"]


def test_complete_activity_credits_current_xp(progress_service, activity_store, read_activity, test_user_id):
    """Test completions snapshot XP and renaming the activity does not change past totals"""
    progress_service.complete_activity(read_activity.id, as_of="2024-01-02")
    activity_store.update_activity(read_activity.id, {"name": "Read a chapter", "xp": 500})

    result = progress_service.complete_activity(read_activity.id, as_of="2024-01-03")

    assert result["xp_awarded"] == 50
    assert activity_store.get_total_xp_for_user(test_user_id) == 100


# ============================================================================
# Claiming Rewards
# ============================================================================

def test_claim_reward_success(progress_service, activity_store, read_activity, level_rewards, test_user_id):
    earn(activity_store, read_activity, ["2024-01-01"] * 4)
    coffee = level_rewards[0]

    result = progress_service.claim_reward(test_user_id, coffee.id)

    assert result["success"] is True
    assert result["reward"]["unlocked"] is True
    assert result["message"] == "Congratulations! You've claimed: Coffee out"


def test_claim_reward_needs_xp(progress_service, activity_store, read_activity, level_rewards, test_user_id):
    earn(activity_store, read_activity, ["2024-01-01"])
    coffee = level_rewards[0]

    result = progress_service.claim_reward(test_user_id, coffee.id)

    assert result["success"] is False
    assert result["message"] == "150 more XP needed for 'Coffee out'"
    assert result["reward"]["unlocked"] is False


def test_claim_reward_twice(progress_service, activity_store, read_activity, level_rewards, test_user_id):
    earn(activity_store, read_activity, ["2024-01-01"] * 4)
    coffee = level_rewards[0]
    progress_service.claim_reward(test_user_id, coffee.id)

    result = progress_service.claim_reward(test_user_id, coffee.id)

    assert result["success"] is False
    assert result["message"] == "'Coffee out' has already been claimed"


def test_claim_reward_wrong_owner(progress_service, level_rewards, other_user_id):
    result = progress_service.claim_reward(other_user_id, level_rewards[0].id)

    assert result == {"success": False, "reward": None, "message": "Reward not found"}
