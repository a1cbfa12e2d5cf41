"""
Rewards Store

Level-gated unlockables. XP-dependent queries take ``current_xp`` from the
caller (normally ActivityStore.get_total_xp_for_user) instead of reading
another store.

Two separate notions:
- XP-eligible: ``xp_required <= current_xp``; this alone drives the level
- claimed: ``unlocked`` set by ``claim_reward``; one-way, a repeat claim
  re-stamps ``claimed_at``
"""

from typing import Any, Dict, List, Optional, Union
import logging

from habitquest.models import Reward, RewardCreate, RewardUpdate, apply_patch, coerce_input
from habitquest.storage import PersistentStore
from habitquest.utils.datetime_helpers import generate_id

logger = logging.getLogger(__name__)

# Level reported when no reward is XP-eligible
BASE_LEVEL = 1


class RewardsStore(PersistentStore):
    """Rewards scoped by user"""

    namespace = "rewards-storage"

    def _reset_state(self) -> None:
        self.rewards: List[Reward] = []

    def _restore_state(self, state: Dict[str, Any]) -> None:
        self.rewards = [Reward.model_validate(r) for r in state.get("rewards", [])]

    def _dump_state(self) -> Dict[str, Any]:
        return {"rewards": [r.model_dump(mode="json") for r in self.rewards]}

    def _find_index(self, reward_id: str) -> Optional[int]:
        return next((i for i, r in enumerate(self.rewards) if r.id == reward_id), None)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def add_reward(self, data: Union[RewardCreate, Dict[str, Any]]) -> Reward:
        """Create a locked reward"""
        create = coerce_input(RewardCreate, data)
        reward = Reward(
            **create.model_dump(),
            id=generate_id("reward"),
            unlocked=False,
            created_at=self.clock(),
        )
        self.rewards.append(reward)
        self._persist()

        logger.info(
            f"Added level {reward.level} reward '{reward.name}' "
            f"({reward.xp_required} XP) for user {reward.user_id}"
        )
        return reward

    def update_reward(self, reward_id: str, updates: Union[RewardUpdate, Dict[str, Any]]) -> Optional[Reward]:
        """Merge editable fields; ``unlocked``/``claimed_at`` are not editable"""
        patch = coerce_input(RewardUpdate, updates)
        index = self._find_index(reward_id)
        if index is None:
            return None

        self.rewards[index] = apply_patch(self.rewards[index], patch)
        self._persist()
        return self.rewards[index]

    def delete_reward(self, reward_id: str) -> bool:
        index = self._find_index(reward_id)
        if index is None:
            return False

        del self.rewards[index]
        self._persist()
        return True

    def claim_reward(self, reward_id: str) -> Optional[Reward]:
        """
        Mark a reward unlocked and stamp ``claimed_at``

        No XP check happens here (see ``can_claim_reward``). Claiming an
        already unlocked reward keeps it unlocked and re-stamps
        ``claimed_at``.
        """
        index = self._find_index(reward_id)
        if index is None:
            return None

        reward = self.rewards[index]
        if reward.unlocked:
            logger.debug(f"Reward {reward_id} claimed again, re-stamping claimed_at")

        self.rewards[index] = reward.model_copy(update={"unlocked": True, "claimed_at": self.clock()})
        self._persist()

        logger.info(f"User {reward.user_id} claimed reward '{reward.name}'")
        return self.rewards[index]

    def get_reward(self, reward_id: str) -> Optional[Reward]:
        index = self._find_index(reward_id)
        return self.rewards[index] if index is not None else None

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def get_rewards_for_user(self, user_id: str) -> List[Reward]:
        """Rewards of ``user_id`` by ascending level (ties keep creation order)"""
        return sorted((r for r in self.rewards if r.user_id == user_id), key=lambda r: r.level)

    def get_next_reward(self, user_id: str, current_xp: int) -> Optional[Reward]:
        """First reward, in level order, that is locked and still out of reach"""
        return next(
            (
                r for r in self.get_rewards_for_user(user_id)
                if not r.unlocked and r.xp_required > current_xp
            ),
            None,
        )

    def get_current_level(self, user_id: str, current_xp: int) -> int:
        """
        Highest level among rewards whose XP threshold is met

        Ignores ``unlocked``; returns 1 when nothing qualifies.
        """
        levels = [
            r.level for r in self.rewards
            if r.user_id == user_id and r.xp_required <= current_xp
        ]
        return max(levels) if levels else BASE_LEVEL

    def can_claim_reward(self, reward_id: str, current_xp: int) -> bool:
        """Reward exists, is not yet unlocked and its XP threshold is met"""
        reward = self.get_reward(reward_id)
        return reward is not None and not reward.unlocked and current_xp >= reward.xp_required

    def get_claimable_rewards(self, user_id: str, current_xp: int) -> List[Reward]:
        """Locked rewards of ``user_id`` whose threshold is met, in level order"""
        return [
            r for r in self.get_rewards_for_user(user_id)
            if not r.unlocked and current_xp >= r.xp_required
        ]
