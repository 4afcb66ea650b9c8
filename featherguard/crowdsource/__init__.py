"""
FeatherGuard - Crowdsource Module
Handles citizen window-strike submissions.
"""

from featherguard.crowdsource.outcomes import (
    Outcome,
    Notice,
    NoticeLevel,
    attempt,
)
from featherguard.crowdsource.classification import (
    Classifier,
    ClassificationKind,
    ClassificationResult,
    classify_or_fallback,
)
from featherguard.crowdsource.collection import ReportCollection
from featherguard.crowdsource.workflow import (
    SubmissionWorkflow,
    SubmissionDetails,
    StepResult,
    WorkflowState,
)
from featherguard.crowdsource.factory import create_workflow

__all__ = [
    # Outcomes
    "Outcome",
    "Notice",
    "NoticeLevel",
    "attempt",
    # Classification
    "Classifier",
    "ClassificationKind",
    "ClassificationResult",
    "classify_or_fallback",
    # Workflow
    "ReportCollection",
    "SubmissionWorkflow",
    "SubmissionDetails",
    "StepResult",
    "WorkflowState",
    "create_workflow",
]
