import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from invitation.rsvp.controller import SubmissionController
from invitation.rsvp.dtos import RsvpDraft, SubmissionStatus
from invitation.rsvp.storage import DraftStore

logger = logging.getLogger(__name__)


class StepId(str, Enum):
    WELCOME = "welcome"
    DETAILS = "details"
    RSVP = "rsvp"
    DRESSCODE = "dresscode"
    END = "end"


@dataclass(frozen=True)
class Step:
    id: StepId
    title: str


STEPS: tuple[Step, ...] = (
    Step(StepId.WELCOME, "Invitation"),
    Step(StepId.DETAILS, "Details"),
    Step(StepId.RSVP, "RSVP"),
    Step(StepId.DRESSCODE, "Dress code"),
    Step(StepId.END, "The end"),
)


class Direction(int, Enum):
    BACKWARD = -1
    FORWARD = 1


class Wizard:
    """
    Linear invitation wizard.

    Moving forward out of the RSVP step requires a successful submission.
    Leaving the RSVP step while a submission is in flight cancels it and
    resets the status to idle.
    """

    def __init__(
        self,
        controller: SubmissionController,
        draft_store: DraftStore | None = None,
        steps: tuple[Step, ...] = STEPS,
    ):
        self.controller = controller
        self.steps = steps
        self._draft_store = draft_store
        self.draft = draft_store.load() if draft_store else RsvpDraft()
        self.opened = False
        self.index = 0
        self.direction = Direction.FORWARD

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    @property
    def current(self) -> Step:
        return self.steps[self.index]

    @property
    def navigation_locked(self) -> bool:
        return self.controller.status == SubmissionStatus.SUBMITTING

    def open(self) -> None:
        self.opened = True
        self.direction = Direction.FORWARD
        self.index = 0

    def go(self, target: int) -> None:
        target = max(0, min(self.last_index, target))
        self.direction = Direction.FORWARD if target > self.index else Direction.BACKWARD
        self.index = target
        if self.current.id != StepId.RSVP and self.controller.cancel():
            logger.debug("Left the RSVP step mid-submission, request cancelled")
            self.controller.reset()

    def next(self) -> None:
        self.go(self.index + 1)

    def prev(self) -> None:
        self.go(self.index - 1)

    async def jump(self, target: int) -> bool:
        """Navigate to `target`; forward out of the RSVP step only after a successful submit."""
        if self.current.id == StepId.RSVP and target > self.index:
            return await self._submit_and_go(target)
        self.go(target)
        return True

    async def submit_and_continue(self) -> bool:
        return await self.jump(self.index + 1)

    async def _submit_and_go(self, target: int) -> bool:
        ok = await self.controller.submit(self.draft)
        if ok:
            self.go(target)
        return ok

    def edit(self, **changes: Any) -> RsvpDraft:
        """Apply field edits, persist the draft and clear a stale success/error message."""
        updated = self.draft.updated(**changes)
        if updated == self.draft:
            return self.draft
        self.draft = updated
        if self._draft_store is not None:
            self._draft_store.save(self.draft)
        if self.controller.status.is_terminal:
            self.controller.reset()
        return self.draft
