"""
Policy engine domain exceptions.

Raised internally by the command segmenter. The public decision functions
never let these escape: they are converted into rejecting verdicts.
"""


class PolicyError(Exception):
    """Base exception for policy engine errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize policy error.

        Args:
            message: Error message.
        """
        self.message = message
        super().__init__(message)


class SegmentationError(PolicyError):
    """Command string could not be split into sub-commands unambiguously."""

    def __init__(self, message: str, position: int | None = None) -> None:
        """
        Initialize segmentation error.

        Args:
            message: Error message describing the ambiguity.
            position: Character offset where scanning gave up (if known).
        """
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
