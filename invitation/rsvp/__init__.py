from .controller import SubmissionController
from .dtos import Attending, RsvpDraft, RsvpPayload, SubmissionState, SubmissionStatus, WeddingInfo
from .wizard import STEPS, StepId, Wizard

__all__ = [
    "Attending",
    "RsvpDraft",
    "RsvpPayload",
    "STEPS",
    "StepId",
    "SubmissionController",
    "SubmissionState",
    "SubmissionStatus",
    "WeddingInfo",
    "Wizard",
]
