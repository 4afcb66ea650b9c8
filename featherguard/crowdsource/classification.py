"""
Species classification policy
Best-effort enrichment: a failing classifier degrades to a sentinel text.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from featherguard.core.constants import CONFIDENCE_PATTERN, SPECIES_PROMPT_TEMPLATE
from featherguard.core.models import PhotoUpload
from featherguard.crowdsource.outcomes import attempt

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    """Image recognition service."""

    async def classify(self, photo: PhotoUpload, instruction: str) -> str:
        ...


class ClassificationKind(str, Enum):
    """What the classification step produced."""
    SPECIES = "species"
    NOT_A_BIRD = "not_a_bird"
    UNAVAILABLE = "unavailable"


@dataclass
class ClassificationResult:
    """
    Outcome of the classification step.

    `text` is what ends up in the report's species field: the service's
    answer, the not-a-bird sentinel or the fallback sentinel.
    """
    kind: ClassificationKind
    text: str
    species: Optional[str] = None
    confidence: Optional[float] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.kind != ClassificationKind.UNAVAILABLE


def build_instruction(language: str, not_a_bird_text: str) -> str:
    """Prompt sent with every photo."""
    return SPECIES_PROMPT_TEMPLATE.format(language=language, not_a_bird=not_a_bird_text)


def interpret_answer(answer: str, not_a_bird_text: str) -> ClassificationResult:
    """
    Read a free-text answer of the form "name (confidence%)".

    Args:
        answer: Trimmed service reply
        not_a_bird_text: Sentinel the service was told to use for non-birds

    Returns:
        ClassificationResult of kind SPECIES or NOT_A_BIRD
    """
    if answer == not_a_bird_text:
        return ClassificationResult(kind=ClassificationKind.NOT_A_BIRD, text=answer)

    confidence = None
    match = re.search(CONFIDENCE_PATTERN, answer)
    if match:
        confidence = min(float(match.group(1)), 100.0) / 100.0

    species = answer.split("(", 1)[0].strip() or None

    return ClassificationResult(
        kind=ClassificationKind.SPECIES,
        text=answer,
        species=species,
        confidence=confidence,
    )


async def classify_or_fallback(
    classifier: Classifier,
    photo: PhotoUpload,
    instruction: str,
    fallback_text: str,
    not_a_bird_text: str
) -> ClassificationResult:
    """
    Run the classifier; never raises.

    Any exception, and any blank answer, yields an UNAVAILABLE result whose
    text is the fallback sentinel.

    Args:
        classifier: Classification service
        photo: Photo to classify
        instruction: Prompt for the service
        fallback_text: Species text used when classification fails
        not_a_bird_text: Sentinel for non-bird subjects

    Returns:
        ClassificationResult
    """
    outcome = await attempt(
        lambda: classifier.classify(photo, instruction),
        label="classification",
    )

    if outcome.ok and isinstance(outcome.value, str) and outcome.value.strip():
        result = interpret_answer(outcome.value.strip(), not_a_bird_text)
        logger.info(f"Classified {photo.filename} as {result.text!r}")
        return result

    error = str(outcome.error) if outcome.error else "empty answer"
    logger.warning(f"Classification unavailable for {photo.filename}: {error}")

    return ClassificationResult(
        kind=ClassificationKind.UNAVAILABLE,
        text=fallback_text,
        error=error,
    )
