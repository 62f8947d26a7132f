"""
Verdict returned by every policy decision.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of a policy check.

    Attributes:
        allowed: Whether the tool call / command may proceed.
        reason: Human-readable explanation. Always set when ``allowed`` is
            False; set on allow when a non-default rule fired.
    """

    allowed: bool
    reason: str | None = None

    def __post_init__(self) -> None:
        """
        Validate verdict consistency.

        Raises:
            ValueError: If a rejection carries no reason.
        """
        if not self.allowed and not self.reason:
            raise ValueError("A rejecting verdict must carry a reason")

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, reason: str | None = None) -> "Verdict":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str) -> "Verdict":
        return cls(allowed=False, reason=reason)
