"""Exceptions raised across subsystem boundaries.

Property falsification, discards and unmet expectations are NOT exceptions;
they are run results (see contracts/results.py). The classes here signal a
broken oracle, a broken generator, or a violated engine invariant. None of
them is caught inside the engine.
"""


class TreeInvariantError(Exception):
    """Raised when an evaluation node is used in a context it cannot satisfy.

    Example: a node that still needs its side-effecting step reaching code
    that reads its forced outcome. This is a programming error in the engine
    or in a hand-built tree, never a property failure.
    """


class FatalOracleError(Exception):
    """Raised when the predicate itself threw at a failure point.

    An exception is not a falsification to be shrunk around: it means the
    test oracle is broken, so the run is aborted instead of minimised.

    Attributes:
        name: Name of the property being checked (may be empty)
        description: Captured description of the original exception
        arguments: Quantified values that produced the exception
    """

    def __init__(self, name: str, description: str, arguments: tuple[object, ...] = ()) -> None:
        self.name = name
        self.description = description
        self.arguments = arguments
        label = f"'{name}'" if name else "property"
        super().__init__(f"Test case for {label} threw an exception: {description}")


class GeneratorExhaustedError(Exception):
    """Raised when a filtered generator cannot produce an acceptable value.

    Attributes:
        attempts: Number of candidate values drawn and rejected
    """

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Generator predicate not satisfied after {attempts} attempts")
