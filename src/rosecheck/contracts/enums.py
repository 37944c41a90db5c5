"""Modes and kinds shared between the outcome model and the engine."""

from enum import StrEnum


class Quantifier(StrEnum):
    """How a property quantifies over its generated inputs.

    UNIVERSAL properties must hold for every sample. EXISTENTIAL properties
    need one witness within the bounded search (the discard budget).
    """

    UNIVERSAL = "universal"
    EXISTENTIAL = "existential"


class CallbackTiming(StrEnum):
    """When the run loop dispatches a callback.

    Values:
        POST_TEST: After every evaluated outcome, shrink candidates included
        POST_FINAL_FAILURE: Once, after shrinking settles on a counterexample
    """

    POST_TEST = "post_test"
    POST_FINAL_FAILURE = "post_final_failure"


class CallbackKind(StrEnum):
    """Whether a callback describes the counterexample."""

    COUNTEREXAMPLE = "counterexample"
    NOT_COUNTEREXAMPLE = "not_counterexample"
