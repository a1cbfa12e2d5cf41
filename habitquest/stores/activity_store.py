"""
Activity Store

Owns XP-earning activity definitions and their per-day completion records,
and derives XP totals and streaks from them.

Rules:
- An activity's XP is fixed at creation; patches cannot carry ``xp``
- Deleting an activity deletes its completions
- Completions are permanent history; the daily boundary check only moves
  the ``last_reset_date`` marker
- ``complete_activity`` records whatever it is given: daily caps and
  duplicate same-day completions are the caller's concern
  (see ``can_complete_activity``)
- Unknown ids are silent no-ops
"""

from typing import Any, Dict, List, Optional, Union
from datetime import date
import logging

from habitquest.config import STREAK_LOOKBACK_DAYS
from habitquest.gamification import calculate_current_streak, calculate_longest_streak
from habitquest.models import (
    Activity,
    ActivityCreate,
    ActivityType,
    ActivityUpdate,
    Completion,
    apply_patch,
    coerce_input,
)
from habitquest.storage import PersistentStore, StorageBackend
from habitquest.utils.datetime_helpers import Clock, DateLike, days_ending, generate_id, now_local, to_date

logger = logging.getLogger(__name__)


class ActivityStore(PersistentStore):
    """Activities, completions and the derived XP/streak queries"""

    namespace = "xp-storage"

    def __init__(
        self,
        backend: StorageBackend,
        clock: Clock = now_local,
        streak_lookback_days: int = STREAK_LOOKBACK_DAYS
    ):
        self.streak_lookback_days = streak_lookback_days
        super().__init__(backend, clock)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _reset_state(self) -> None:
        self.activities: List[Activity] = []
        self.completions: List[Completion] = []
        self.last_reset_date: date = self.today()

    def _restore_state(self, state: Dict[str, Any]) -> None:
        self.activities = [Activity.model_validate(a) for a in state.get("activities", [])]
        self.completions = [Completion.model_validate(c) for c in state.get("completions", [])]
        if state.get("last_reset_date"):
            self.last_reset_date = to_date(state["last_reset_date"])

    def _dump_state(self) -> Dict[str, Any]:
        return {
            "activities": [a.model_dump(mode="json") for a in self.activities],
            "completions": [c.model_dump(mode="json") for c in self.completions],
            "last_reset_date": self.last_reset_date.isoformat(),
        }

    # ------------------------------------------------------------------
    # Daily boundary
    # ------------------------------------------------------------------

    def check_and_reset_daily(self, today: Optional[DateLike] = None) -> bool:
        """
        Advance the daily boundary marker if the day has changed

        Safe to call on every app load. Completions are kept.

        Args:
            today: Day to compare against (defaults to the store clock)

        Returns:
            True if the marker moved to a new day
        """
        today = to_date(today) if today is not None else self.today()
        if self.last_reset_date == today:
            return False

        logger.info(f"Daily boundary crossed: {self.last_reset_date} → {today}")
        self.last_reset_date = today
        self._persist()
        return True

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    def add_activity(self, data: Union[ActivityCreate, Dict[str, Any]]) -> Activity:
        """
        Create an activity

        Args:
            data: Activity fields without ``id``/``created_at``

        Returns:
            The new activity
        """
        create = coerce_input(ActivityCreate, data)
        activity = Activity(
            **create.model_dump(),
            id=generate_id("xp"),
            created_at=self.clock(),
        )
        self.activities.append(activity)
        self._persist()

        logger.info(f"Added activity '{activity.name}' ({activity.xp} XP) for user {activity.user_id}")
        return activity

    def update_activity(self, activity_id: str, updates: Union[ActivityUpdate, Dict[str, Any]]) -> Optional[Activity]:
        """
        Merge editable fields into an activity

        ``xp`` cannot be changed: ActivityUpdate has no such field and an
        ``xp`` key in a dict is dropped.

        Returns:
            The updated activity, or None if the id is unknown
        """
        patch = coerce_input(ActivityUpdate, updates)

        for index, activity in enumerate(self.activities):
            if activity.id == activity_id:
                updated = apply_patch(activity, patch)
                self.activities[index] = updated
                self._persist()
                logger.debug(f"Updated activity {activity_id}")
                return updated

        logger.debug(f"update_activity: no activity {activity_id}")
        return None

    def delete_activity(self, activity_id: str) -> bool:
        """
        Delete an activity and all of its completions

        Returns:
            True if an activity was removed
        """
        remaining = [a for a in self.activities if a.id != activity_id]
        if len(remaining) == len(self.activities):
            logger.debug(f"delete_activity: no activity {activity_id}")
            return False

        before = len(self.completions)
        self.activities = remaining
        self.completions = [c for c in self.completions if c.activity_id != activity_id]
        self._persist()

        logger.info(
            f"Deleted activity {activity_id} and {before - len(self.completions)} completions"
        )
        return True

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        """Get a single activity by id"""
        return next((a for a in self.activities if a.id == activity_id), None)

    def get_activities_for_user(self, user_id: str) -> List[Activity]:
        """Activities owned by ``user_id`` in creation order"""
        return [a for a in self.activities if a.user_id == user_id]

    def generate_activities(self, items: List[Dict[str, Any]], user_id: str) -> List[Activity]:
        """
        Bulk-create activities for ``user_id``

        Args:
            items: Dicts with ``name``, ``xp``, ``type``, ``category`` (any
                ``user_id`` in an item is overridden)
            user_id: Owner of every generated activity

        Returns:
            The created activities
        """
        created = []
        for item in items:
            create = ActivityCreate.model_validate({**item, "user_id": user_id})
            created.append(Activity(
                **create.model_dump(),
                id=generate_id("xp"),
                created_at=self.clock(),
            ))

        self.activities.extend(created)
        self._persist()

        logger.info(f"Generated {len(created)} activities for user {user_id}")
        return created

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------

    def complete_activity(self, activity_id: str, completion_date: DateLike, xp_earned: int) -> Completion:
        """
        Record a completion

        No daily cap or duplicate check happens here.

        Args:
            activity_id: Completed activity
            completion_date: Calendar day of the completion
            xp_earned: XP snapshot to credit

        Returns:
            The new completion record
        """
        completion = Completion(
            activity_id=activity_id,
            date=to_date(completion_date),
            xp_earned=xp_earned,
            completed_at=self.clock(),
        )
        self.completions.append(completion)
        self._persist()

        logger.info(f"Completed activity {activity_id} on {completion.date} (+{xp_earned} XP)")
        return completion

    def _activity_ids_for_user(self, user_id: str) -> set:
        return {a.id for a in self.activities if a.user_id == user_id}

    def get_completions_for_date(self, completion_date: DateLike, user_id: str) -> List[Completion]:
        """Completions on a day for activities owned by ``user_id``"""
        day = to_date(completion_date)
        activity_ids = self._activity_ids_for_user(user_id)
        return [
            c for c in self.completions
            if c.date == day and c.activity_id in activity_ids
        ]

    def get_completion_count(self, activity_id: str, completion_date: DateLike) -> int:
        """Number of completions of one activity on a day"""
        day = to_date(completion_date)
        return sum(1 for c in self.completions if c.activity_id == activity_id and c.date == day)

    def can_complete_activity(self, activity_id: str, completion_date: Optional[DateLike] = None) -> bool:
        """
        Whether another completion fits under the activity's daily cap

        Bonus activities and activities without a cap can always be
        completed. Unknown activities cannot.
        """
        activity = self.get_activity(activity_id)
        if activity is None:
            return False
        if activity.type == ActivityType.BONUS or not activity.daily_cap:
            return True

        day = to_date(completion_date) if completion_date is not None else self.today()
        return self.get_completion_count(activity_id, day) < activity.daily_cap

    # ------------------------------------------------------------------
    # XP totals
    # ------------------------------------------------------------------

    def get_total_xp_for_date(self, completion_date: DateLike, user_id: str) -> int:
        """XP earned by ``user_id`` on one day"""
        return sum(c.xp_earned for c in self.get_completions_for_date(completion_date, user_id))

    def get_total_xp_for_user(self, user_id: str) -> int:
        """Lifetime XP of ``user_id``"""
        activity_ids = self._activity_ids_for_user(user_id)
        return sum(c.xp_earned for c in self.completions if c.activity_id in activity_ids)

    def get_xp_history(
        self,
        user_id: str,
        days: int = 7,
        as_of: Optional[DateLike] = None
    ) -> List[Dict[str, Any]]:
        """
        Daily XP for the ``days`` calendar days ending at ``as_of``

        Returns:
            List of {'date': date, 'xp': int}, oldest first; days without
            completions are included with 0 XP
        """
        end = to_date(as_of) if as_of is not None else self.today()
        activity_ids = self._activity_ids_for_user(user_id)

        totals: Dict[date, int] = {}
        for c in self.completions:
            if c.activity_id in activity_ids:
                totals[c.date] = totals.get(c.date, 0) + c.xp_earned

        return [{"date": day, "xp": totals.get(day, 0)} for day in days_ending(end, days)]

    # ------------------------------------------------------------------
    # Streaks
    # ------------------------------------------------------------------

    def _completion_dates(self, activity_id: str) -> List[date]:
        return [c.date for c in self.completions if c.activity_id == activity_id]

    def get_streak_for_activity(self, activity_id: str, as_of: Optional[DateLike] = None) -> int:
        """
        Current streak of an activity

        Consecutive days with a completion ending at ``as_of`` (today by
        default). A missing ``as_of`` day does not break the streak.
        """
        as_of = to_date(as_of) if as_of is not None else self.today()
        return calculate_current_streak(
            self._completion_dates(activity_id),
            as_of,
            max_days=self.streak_lookback_days,
        )

    def get_longest_streak_for_activity(self, activity_id: str) -> int:
        """Best streak an activity has ever had"""
        return calculate_longest_streak(self._completion_dates(activity_id))
