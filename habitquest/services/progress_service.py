"""
ProgressService - XP, level and reward progress

Composes the Activity Store and the Rewards Store. Lifetime XP is read from
the Activity Store and passed into the Rewards Store queries as
``current_xp``; the stores themselves stay independent.
"""

import logging
from typing import Any, Dict, Optional

from habitquest.stores import ActivityStore, RewardsStore
from habitquest.utils.datetime_helpers import DateLike, to_date

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Service for progress and reward flows.

    Responsibilities:
    - Daily-cap aware activity completion
    - Progress summary (total/today XP, level, next reward)
    - XP-gated reward claiming
    """

    def __init__(self, activity_store: ActivityStore, rewards_store: RewardsStore):
        """
        Initialize ProgressService.

        Args:
            activity_store: Source of XP totals and streaks
            rewards_store: Rewards queried with the user's lifetime XP
        """
        self.activities = activity_store
        self.rewards = rewards_store
        logger.debug("ProgressService initialized")

    def get_progress_summary(self, user_id: str, as_of: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Current progress for a user.

        Args:
            user_id: Owner of the activities and rewards
            as_of: Day used for "today's XP" (defaults to the activity store clock)

        Returns:
            {
                'user_id': str,
                'total_xp': int,
                'today_xp': int,
                'current_level': int,
                'next_reward': dict | None,
                'xp_to_next_reward': int,
                'next_reward_progress': float,  # percent, capped at 100
                'claimable_rewards': list[dict]
            }
        """
        day = to_date(as_of) if as_of is not None else self.activities.today()

        total_xp = self.activities.get_total_xp_for_user(user_id)
        today_xp = self.activities.get_total_xp_for_date(day, user_id)
        current_level = self.rewards.get_current_level(user_id, total_xp)
        next_reward = self.rewards.get_next_reward(user_id, total_xp)
        claimable = self.rewards.get_claimable_rewards(user_id, total_xp)

        xp_to_next = 0
        progress = 100.0
        if next_reward is not None:
            xp_to_next = next_reward.xp_required - total_xp
            progress = 0.0
            if next_reward.xp_required > 0:
                progress = round(min(max(total_xp, 0) / next_reward.xp_required * 100, 100.0), 1)

        return {
            "user_id": user_id,
            "total_xp": total_xp,
            "today_xp": today_xp,
            "current_level": current_level,
            "next_reward": next_reward.model_dump() if next_reward else None,
            "xp_to_next_reward": xp_to_next,
            "next_reward_progress": progress,
            "claimable_rewards": [r.model_dump() for r in claimable],
        }

    def complete_activity(self, activity_id: str, as_of: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Complete an activity for the day, honoring its daily cap.

        The completion is credited with the activity's current XP.

        Returns:
            {
                'success': bool,
                'xp_awarded': int,
                'today_xp': int,
                'total_xp': int,
                'current_streak': int,
                'leveled_up': bool,
                'new_level': int,
                'message': str
            }
        """
        day = to_date(as_of) if as_of is not None else self.activities.today()
        activity = self.activities.get_activity(activity_id)

        result = {
            "success": False,
            "xp_awarded": 0,
            "today_xp": 0,
            "total_xp": 0,
            "current_streak": 0,
            "leveled_up": False,
            "new_level": 1,
            "message": "",
        }

        if activity is None:
            result["message"] = "Activity not found"
            logger.debug(f"complete_activity: no activity {activity_id}")
            return result

        user_id = activity.user_id
        old_total = self.activities.get_total_xp_for_user(user_id)
        old_level = self.rewards.get_current_level(user_id, old_total)

        if not self.activities.can_complete_activity(activity_id, day):
            result.update({
                "today_xp": self.activities.get_total_xp_for_date(day, user_id),
                "total_xp": old_total,
                "current_streak": self.activities.get_streak_for_activity(activity_id, as_of=day),
                "new_level": old_level,
                "message": f"Daily cap reached for {activity.name}",
            })
            logger.info(f"Daily cap reached for activity {activity_id} on {day}")
            return result

        self.activities.complete_activity(activity_id, day, activity.xp)

        new_total = old_total + activity.xp
        new_level = self.rewards.get_current_level(user_id, new_total)
        streak = self.activities.get_streak_for_activity(activity_id, as_of=day)

        message = f"Earned {activity.xp} XP from {activity.name}!"
        if streak > 1:
            message += f" {streak}-day streak 🔥"
        if new_level > old_level:
            message += f" Level up: {old_level} → {new_level} 🎉"
            logger.info(f"User {user_id} leveled up from {old_level} to {new_level}")

        result.update({
            "success": True,
            "xp_awarded": activity.xp,
            "today_xp": self.activities.get_total_xp_for_date(day, user_id),
            "total_xp": new_total,
            "current_streak": streak,
            "leveled_up": new_level > old_level,
            "new_level": new_level,
            "message": message,
        })
        return result

    def claim_reward(self, user_id: str, reward_id: str) -> Dict[str, Any]:
        """
        Claim a reward if the user's lifetime XP meets its threshold.

        Returns:
            {
                'success': bool,
                'reward': dict | None,
                'message': str
            }
        """
        reward = self.rewards.get_reward(reward_id)
        if reward is None or reward.user_id != user_id:
            return {"success": False, "reward": None, "message": "Reward not found"}

        if reward.unlocked:
            return {
                "success": False,
                "reward": reward.model_dump(),
                "message": f"'{reward.name}' has already been claimed",
            }

        total_xp = self.activities.get_total_xp_for_user(user_id)
        if not self.rewards.can_claim_reward(reward_id, total_xp):
            return {
                "success": False,
                "reward": reward.model_dump(),
                "message": f"{reward.xp_required - total_xp} more XP needed for '{reward.name}'",
            }

        claimed = self.rewards.claim_reward(reward_id)
        return {
            "success": True,
            "reward": claimed.model_dump(),
            "message": f"Congratulations! You've claimed: {claimed.name}",
        }
