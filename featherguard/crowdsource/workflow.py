"""
Window-strike submission workflow
Takes one report from photo selection to a stored record.

    AWAITING_PHOTO -> AWAITING_CONFIRMATION -> AWAITING_DETAILS -> COMPLETED

The photo upload and the record insert must succeed for the workflow to
advance. Species classification and geolocation are best-effort: their
failures only produce notices.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import PurePath
from typing import Optional, Dict, Any

from featherguard.core.config import settings
from featherguard.core.exceptions import InvalidTransitionError
from featherguard.core.models import PhotoUpload, Report, StrikeStatus, WindowType
from featherguard.crowdsource.classification import (
    Classifier,
    ClassificationKind,
    ClassificationResult,
    build_instruction,
    classify_or_fallback,
)
from featherguard.crowdsource.collection import ReportCollection
from featherguard.crowdsource.outcomes import Notice, NoticeLevel, attempt
from featherguard.ingestion.geolocation_client import GeolocationProvider
from featherguard.storage.base import ObjectStore, RecordStore

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    """Steps of a single submission."""
    AWAITING_PHOTO = "awaiting_photo"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    AWAITING_DETAILS = "awaiting_details"
    COMPLETED = "completed"


@dataclass
class StepResult:
    """What a workflow operation did."""
    state: WorkflowState
    advanced: bool
    notice: Optional[Notice] = None
    classification: Optional[ClassificationResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "advanced": self.advanced,
            "notice": self.notice.to_dict() if self.notice else None,
            "classification": self.classification.kind.value if self.classification else None,
        }


@dataclass
class SubmissionDetails:
    """Fields entered on the last step; None keeps the draft's value."""
    status: Optional[StrikeStatus] = None
    window_type: Optional[WindowType] = None
    reporter_name: Optional[str] = None
    description: Optional[str] = None

    def apply_to(self, draft: Report) -> None:
        if self.status is not None:
            draft.status = self.status
        if self.window_type is not None:
            draft.window_type = self.window_type
        if self.reporter_name is not None:
            draft.reporter_name = self.reporter_name
        if self.description is not None:
            draft.description = self.description


def generate_photo_name(photo: PhotoUpload) -> str:
    """
    Fresh object name for a photo: 128 random bits plus the file extension.

    The extension comes from the original filename, or is guessed from an
    image content type when the filename has none.
    """
    suffix = PurePath(photo.filename or "").suffix.lower()
    if not suffix and (photo.content_type or "").startswith("image/"):
        suffix = mimetypes.guess_extension(photo.content_type) or ""
    return f"{uuid.uuid4().hex}{suffix}"


class SubmissionWorkflow:
    """
    Coordinates one window-strike submission at a time.

    Owns the draft report until it is stored. Every operation checks the
    current state and raises InvalidTransitionError when called out of order.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        classifier: Classifier,
        record_store: RecordStore,
        geolocator: Optional[GeolocationProvider] = None,
        collection: Optional[ReportCollection] = None,
        fallback_text: Optional[str] = None,
        not_a_bird_text: Optional[str] = None,
        species_language: Optional[str] = None
    ):
        """
        Initialize the workflow.

        Args:
            object_store: Photo storage
            classifier: Species recognition service
            record_store: Report persistence
            geolocator: Default position source for locate()
            collection: Snapshot refreshed after each submission
            fallback_text: Species text when classification fails
            not_a_bird_text: Species text the classifier uses for non-birds
            species_language: Language requested for species names
        """
        self.object_store = object_store
        self.classifier = classifier
        self.record_store = record_store
        self.geolocator = geolocator
        self.collection = collection or ReportCollection(record_store)

        self.fallback_text = fallback_text or settings.classification_fallback_text
        self.not_a_bird_text = not_a_bird_text or settings.not_a_bird_text
        self.instruction = build_instruction(
            species_language or settings.species_language,
            self.not_a_bird_text,
        )

        self.state = WorkflowState.AWAITING_PHOTO
        self.draft = Report()
        self.submitted: Optional[Report] = None
        self.last_classification: Optional[ClassificationResult] = None

    def _require(self, action: str, *states: WorkflowState) -> None:
        if self.state not in states:
            raise InvalidTransitionError(f"Cannot {action} while {self.state.value}")

    def _advance(self, new_state: WorkflowState) -> None:
        logger.info(f"Submission: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def _stay(self, level: NoticeLevel, message: str) -> StepResult:
        return StepResult(state=self.state, advanced=False, notice=Notice(level, message))

    async def capture(self, photo: PhotoUpload) -> StepResult:
        """
        Upload the photo, then try to classify it.

        Upload failure leaves the workflow waiting for a photo. Once the
        upload succeeds the workflow advances whatever the classifier does.

        Args:
            photo: Image selected by the user

        Returns:
            StepResult with the classification outcome
        """
        self._require("capture a photo", WorkflowState.AWAITING_PHOTO)
        if not photo.data:
            raise ValueError("Photo is empty")

        name = generate_photo_name(photo)
        upload = await attempt(
            lambda: self.object_store.upload(name, photo.data, photo.content_type),
            label="photo upload",
        )
        if not upload.ok:
            logger.error(f"Photo upload failed for {photo.filename}: {upload.error}")
            return self._stay(
                NoticeLevel.ERROR,
                "Photo upload failed. Please check your connection and choose the photo again.",
            )

        self.draft.photo_url = upload.value

        classification = await classify_or_fallback(
            self.classifier,
            photo,
            self.instruction,
            self.fallback_text,
            self.not_a_bird_text,
        )
        self.draft.bird_species = classification.text
        self.last_classification = classification

        self._advance(WorkflowState.AWAITING_CONFIRMATION)

        notice = None
        if classification.kind == ClassificationKind.UNAVAILABLE:
            notice = Notice(
                NoticeLevel.WARNING,
                "Automatic species recognition is unavailable. Please enter the species manually.",
            )
        elif classification.kind == ClassificationKind.NOT_A_BIRD:
            notice = Notice(
                NoticeLevel.INFO,
                "No bird was recognized in the photo. You can correct the species by hand.",
            )

        return StepResult(
            state=self.state,
            advanced=True,
            notice=notice,
            classification=classification,
        )

    def edit_species(self, text: str) -> None:
        """Replace the suggested species with the user's text."""
        self._require(
            "edit the species",
            WorkflowState.AWAITING_CONFIRMATION,
            WorkflowState.AWAITING_DETAILS,
        )
        self.draft.bird_species = text

    async def locate(self, provider: Optional[GeolocationProvider] = None) -> StepResult:
        """
        Attach the current position and advance.

        On failure the workflow stays put so the user can retry or skip.

        Args:
            provider: Position source for this call, defaults to the
                workflow's geolocator
        """
        self._require("locate", WorkflowState.AWAITING_CONFIRMATION)

        provider = provider or self.geolocator
        if provider is None:
            return self._stay(NoticeLevel.WARNING, "Location is not available on this device.")

        position = await attempt(lambda: provider.get_current_position(), label="geolocation")
        if not position.ok:
            return self._stay(NoticeLevel.WARNING, "Could not get your GPS position.")
        if position.value is None or position.value.is_origin:
            logger.warning(f"Geolocation returned no usable position: {position.value}")
            return self._stay(NoticeLevel.WARNING, "Could not get your GPS position.")

        self.draft.location = position.value
        self._advance(WorkflowState.AWAITING_DETAILS)

        return StepResult(state=self.state, advanced=True)

    def skip_location(self) -> StepResult:
        """Advance without a position."""
        self._require("skip location", WorkflowState.AWAITING_CONFIRMATION)

        self.draft.location = None
        self._advance(WorkflowState.AWAITING_DETAILS)

        return StepResult(state=self.state, advanced=True)

    async def submit(self, details: Optional[SubmissionDetails] = None) -> StepResult:
        """
        Store the draft as one record.

        Details are applied to the draft first, so a failed insert can be
        retried with the same data.

        Args:
            details: Status, window type, reporter name and description

        Returns:
            StepResult; on success `submitted` holds the stored report
        """
        self._require("submit", WorkflowState.AWAITING_DETAILS)

        if details is not None:
            details.apply_to(self.draft)

        inserted = await attempt(
            lambda: self.record_store.insert(replace(self.draft)),
            label="report insert",
        )
        if not inserted.ok:
            logger.error(f"Report insert failed: {inserted.error}")
            return self._stay(NoticeLevel.ERROR, "Submission failed. Please try again.")

        self.submitted = inserted.value
        self._advance(WorkflowState.COMPLETED)
        logger.info(f"Report {self.submitted.id} submitted")

        refreshed = await attempt(lambda: self.collection.refresh(), label="report list refresh")
        if refreshed.ok:
            notice = Notice(NoticeLevel.INFO, "Report submitted. Thank you!")
        else:
            notice = Notice(
                NoticeLevel.INFO,
                "Report submitted. The report list could not be refreshed yet.",
            )

        return StepResult(state=self.state, advanced=True, notice=notice)

    def reset(self) -> StepResult:
        """Discard the draft and start over."""
        self.draft = Report()
        self.submitted = None
        self.last_classification = None

        if self.state != WorkflowState.AWAITING_PHOTO:
            self._advance(WorkflowState.AWAITING_PHOTO)

        return StepResult(state=self.state, advanced=False)

    def to_dict(self) -> Dict[str, Any]:
        """Current state for the presentation layer."""
        return {
            "state": self.state.value,
            "draft": self.draft.to_dict(),
            "submitted": self.submitted.to_dict() if self.submitted else None,
        }
