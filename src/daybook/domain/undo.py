"""Undo history for ledger edits.

Every mutating edit is recorded as one UndoAction variant. Undoing pops the
newest action, applies its inverse to the affected day through the ledger
service and persists the day. Popping is destructive: there is no redo, and
an action whose undo fails is not put back.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from datetime import date
from typing import Optional

from daybook.domain.entities import Day, Entry
from daybook.domain.ledger import LedgerService
from daybook.utils.date_parser import as_day
from daybook.utils.formatting import truncate

logger = logging.getLogger(__name__)

MAX_STACK_SIZE = 100
LABEL_WIDTH = 20
NOTHING_TO_UNDO = "Nothing to undo"


def _label(text: str) -> str:
    return truncate(text, LABEL_WIDTH)


@dataclass(frozen=True)
class UndoAction(ABC):
    """Base for recorded actions: the affected date and a display label."""

    date: date
    description: str

    @abstractmethod
    def revert(self, day: Day) -> str:
        """Apply the inverse of this action to day; return a message."""
        pass


@dataclass(frozen=True)
class AddEntryAction(UndoAction):
    entry: Entry

    def revert(self, day: Day) -> str:
        # The entry may already be gone; removal is then a no-op
        day.remove_entry(self.entry.id)
        return f"Undo: Removed '{_label(self.entry.description)}'"


@dataclass(frozen=True)
class DeleteEntryAction(UndoAction):
    entry: Entry

    def revert(self, day: Day) -> str:
        day.add_entry(self.entry.clone())
        return f"Undo: Restored '{_label(self.entry.description)}'"


@dataclass(frozen=True)
class EditEntryAction(UndoAction):
    old_entry: Entry
    new_entry: Entry

    def revert(self, day: Day) -> str:
        day.update_entry(self.old_entry.clone())
        return f"Undo: Reverted '{_label(self.old_entry.description)}'"


@dataclass(frozen=True)
class SetScreenTimeAction(UndoAction):
    old_value: str
    new_value: str

    def revert(self, day: Day) -> str:
        day.set_screen_time(self.old_value)
        return f"Undo: Restored screen time to '{self.old_value}'"


@dataclass(frozen=True)
class SetJournalAction(UndoAction):
    old_value: str
    new_value: str

    def revert(self, day: Day) -> str:
        day.journal = self.old_value
        return "Undo: Restored journal"


class UndoStack:
    """Bounded LIFO of actions; pushing past capacity drops the oldest."""

    def __init__(self, max_size: int = MAX_STACK_SIZE):
        self._actions: deque[UndoAction] = deque(maxlen=max_size)

    def push(self, action: UndoAction) -> None:
        self._actions.append(action)

    def pop(self) -> Optional[UndoAction]:
        if not self._actions:
            return None
        return self._actions.pop()

    def peek(self) -> Optional[UndoAction]:
        if not self._actions:
            return None
        return self._actions[-1]

    def is_empty(self) -> bool:
        return not self._actions

    def clear(self) -> None:
        self._actions.clear()

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self):
        """Iterate oldest first."""
        return iter(self._actions)


class UndoManager:
    """Records reversible edits and undoes them against a ledger service."""

    def __init__(self, ledger: LedgerService, max_size: int = MAX_STACK_SIZE):
        """Initialize undo manager.

        Args:
            ledger: Ledger service the inverse actions are applied through
            max_size: Number of actions kept before the oldest is dropped
        """
        self.ledger = ledger
        self.stack = UndoStack(max_size)

    def can_undo(self) -> bool:
        return not self.stack.is_empty()

    def clear(self) -> None:
        self.stack.clear()

    def record_add_entry(self, day: date, entry: Entry) -> None:
        self.stack.push(
            AddEntryAction(
                date=as_day(day),
                description=f"Added '{_label(entry.description)}'",
                entry=entry.clone(),
            )
        )

    def record_delete_entry(self, day: date, entry: Entry) -> None:
        self.stack.push(
            DeleteEntryAction(
                date=as_day(day),
                description=f"Deleted '{_label(entry.description)}'",
                entry=entry.clone(),
            )
        )

    def record_edit_entry(self, day: date, old_entry: Entry, new_entry: Entry) -> None:
        self.stack.push(
            EditEntryAction(
                date=as_day(day),
                description=f"Edited '{_label(old_entry.description)}'",
                old_entry=old_entry.clone(),
                new_entry=new_entry.clone(),
            )
        )

    def record_set_screen_time(self, day: date, old_value: str, new_value: str) -> None:
        self.stack.push(
            SetScreenTimeAction(
                date=as_day(day),
                description=f"Changed screen time to '{new_value}'",
                old_value=old_value,
                new_value=new_value,
            )
        )

    def record_set_journal(self, day: date, old_value: str, new_value: str) -> None:
        self.stack.push(
            SetJournalAction(
                date=as_day(day),
                description="Updated journal",
                old_value=old_value,
                new_value=new_value,
            )
        )

    def undo(self) -> str:
        """Undo the most recent action.

        Returns:
            Message describing what was undone, or NOTHING_TO_UNDO

        Raises:
            StorageError: If the day cannot be loaded or saved; the action
                is discarded either way
        """
        action = self.stack.pop()
        if action is None:
            return NOTHING_TO_UNDO

        day = self.ledger.get_day(action.date)
        message = action.revert(day)
        self.ledger.sync_day(day)
        logger.info("%s (%s)", message, action.date)
        return message
