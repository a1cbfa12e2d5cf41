"""
Journal Store

Dated free-text entries plus reusable writing prompts.

Several entries may share a (user, date) pair; ``get_entry_by_date``
returns the first one added. Prompts are create-only.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from habitquest.models import (
    JournalEntry,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalPrompt,
    JournalPromptCreate,
    apply_patch,
    coerce_input,
)
from habitquest.storage import PersistentStore
from habitquest.utils.datetime_helpers import DateLike, generate_id, to_date

logger = logging.getLogger(__name__)


class JournalStore(PersistentStore):
    """Journal entries and prompts scoped by user"""

    namespace = "journal-storage"

    def _reset_state(self) -> None:
        self.entries: List[JournalEntry] = []
        self.prompts: List[JournalPrompt] = []

    def _restore_state(self, state: Dict[str, Any]) -> None:
        self.entries = [JournalEntry.model_validate(e) for e in state.get("entries", [])]
        self.prompts = [JournalPrompt.model_validate(p) for p in state.get("prompts", [])]

    def _dump_state(self) -> Dict[str, Any]:
        return {
            "entries": [e.model_dump(mode="json") for e in self.entries],
            "prompts": [p.model_dump(mode="json") for p in self.prompts],
        }

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _new_entry(self, create: JournalEntryCreate) -> JournalEntry:
        now = self.clock()
        return JournalEntry(
            **create.model_dump(),
            id=generate_id("journal"),
            created_at=now,
            updated_at=now,
        )

    def add_entry(self, data: Union[JournalEntryCreate, Dict[str, Any]]) -> JournalEntry:
        """Create an entry; same-day duplicates are allowed"""
        entry = self._new_entry(coerce_input(JournalEntryCreate, data))
        self.entries.append(entry)
        self._persist()

        logger.info(f"Added journal entry for {entry.date} (user {entry.user_id})")
        return entry

    def update_entry(self, entry_id: str, updates: Union[JournalEntryUpdate, Dict[str, Any]]) -> Optional[JournalEntry]:
        """Merge editable fields and bump ``updated_at``; None if the id is unknown"""
        patch = coerce_input(JournalEntryUpdate, updates)

        for index, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[index] = apply_patch(entry, patch, updated_at=self.clock())
                self._persist()
                return self.entries[index]

        return None

    def delete_entry(self, entry_id: str) -> bool:
        remaining = [e for e in self.entries if e.id != entry_id]
        if len(remaining) == len(self.entries):
            return False

        self.entries = remaining
        self._persist()
        return True

    def get_entries_for_user(self, user_id: str) -> List[JournalEntry]:
        """Entries of ``user_id``, most recent date first"""
        return sorted(
            (e for e in self.entries if e.user_id == user_id),
            key=lambda e: e.date,
            reverse=True,
        )

    def get_entry_by_date(self, user_id: str, entry_date: DateLike) -> Optional[JournalEntry]:
        """First entry added for (user, date), if any"""
        day = to_date(entry_date)
        return next((e for e in self.entries if e.user_id == user_id and e.date == day), None)

    def generate_entries(self, items: List[Dict[str, Any]], user_id: str) -> List[JournalEntry]:
        """
        Bulk-create entries for ``user_id``

        Args:
            items: Dicts with ``date``, ``title``, ``content`` and optional
                ``mood``, ``tags``
            user_id: Owner of every generated entry
        """
        created = [
            self._new_entry(JournalEntryCreate.model_validate({**item, "user_id": user_id}))
            for item in items
        ]
        self.entries.extend(created)
        self._persist()

        logger.info(f"Generated {len(created)} journal entries for user {user_id}")
        return created

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def add_prompt(self, data: Union[JournalPromptCreate, Dict[str, Any]]) -> JournalPrompt:
        create = coerce_input(JournalPromptCreate, data)
        prompt = JournalPrompt(**create.model_dump(), id=generate_id("prompt"))
        self.prompts.append(prompt)
        self._persist()
        return prompt

    def get_prompts_for_user(self, user_id: str) -> List[JournalPrompt]:
        return [p for p in self.prompts if p.user_id == user_id]

    def generate_prompts(self, items: List[Dict[str, Any]], user_id: str) -> List[JournalPrompt]:
        """Bulk-create prompts (``text``, ``category``) for ``user_id``"""
        created = [
            JournalPrompt(
                **JournalPromptCreate.model_validate({**item, "user_id": user_id}).model_dump(),
                id=generate_id("prompt"),
            )
            for item in items
        ]
        self.prompts.extend(created)
        self._persist()

        logger.info(f"Generated {len(created)} journal prompts for user {user_id}")
        return created
