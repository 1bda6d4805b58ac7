# letter_wizard/wizard/__init__.py
"""Wizard form state and step state machine."""

from .machine import (
    FIELD_STEPS,
    REVIEW_STEP,
    NavigationResult,
    StepField,
    WizardPhase,
    WizardSession,
    WizardStateMachine,
)
from .state import (
    FieldsTouched,
    FieldTouched,
    FieldUpdated,
    FormReset,
    FormState,
    reduce,
)

__all__ = [
    "FIELD_STEPS",
    "REVIEW_STEP",
    "NavigationResult",
    "StepField",
    "WizardPhase",
    "WizardSession",
    "WizardStateMachine",
    "FieldsTouched",
    "FieldTouched",
    "FieldUpdated",
    "FormReset",
    "FormState",
    "reduce",
]
