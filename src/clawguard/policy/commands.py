"""
Command Policy Evaluator.

Decides whether a raw shell command may run under the active policy tier.

Order of evaluation (first matching rule wins):
    1. Obfuscation in the raw command (tier-independent)
    2. Blocklist on the raw command, then per segment; obfuscation per segment
    3. Tier: allow-all / block-destructive allow what survived,
       allowlist-only requires every segment to match the allowlist

Never raises: ambiguity and unexpected failures reject the command.
"""

import logging

from ..config.schema import TIER_ALLOWLIST_ONLY, SecurityConfig
from .exceptions import SegmentationError
from .obfuscation import find_obfuscation, normalize
from .segmenter import segment
from .verdict import Verdict

logger = logging.getLogger(__name__)

REASON_EMPTY = "Command is empty"
REASON_OBFUSCATED = "Command matches a known obfuscation pattern"
REASON_BLOCKED = "Command contains a blocked pattern"
REASON_UNPARSEABLE = "Command could not be parsed safely"
REASON_ERROR = "Command could not be evaluated"
REASON_NOT_ALLOWED = "Command not in allowlist"

# Longest segment excerpt written to the log
LOG_EXCERPT_LENGTH = 200


def _contains_blocked(text: str, blocked_commands: tuple[str, ...]) -> str | None:
    """
    Find a blocklist entry contained in ``text``.

    Matches verbatim and on the normalized text, so quote or whitespace
    games (``r''m  -rf /``) do not slip past a literal entry.

    Args:
        text: Raw command or segment.
        blocked_commands: Blocklist entries.

    Returns:
        The matching entry, or None.
    """
    normalized = normalize(text)
    for blocked in blocked_commands:
        normalized_blocked = normalize(blocked)
        if blocked in text or (
            normalized_blocked and normalized_blocked in normalized
        ):
            return blocked
    return None


def _matches_allowed_command(segment_text: str, allowed: str) -> bool:
    """
    Check a segment against one allowlist entry.

    ``git status`` admits exactly ``git status`` (plus arguments);
    ``npm run`` admits ``npm run build``. A prefix only counts at a word
    boundary unless the entry itself ends in punctuation (``dd if=``).

    Args:
        segment_text: One sub-command.
        allowed: Allowlist entry.

    Returns:
        True if the segment is admitted by the entry.
    """
    if segment_text == allowed:
        return True
    if not segment_text.startswith(allowed):
        return False
    if not allowed[-1].isalnum():
        return True
    return segment_text[len(allowed)].isspace()


def _evaluate(raw: str, config: SecurityConfig) -> Verdict:
    if not isinstance(raw, str) or not raw.strip():
        return Verdict.deny(REASON_EMPTY)

    rule = find_obfuscation(raw)
    if rule:
        logger.warning(f"⛔ Command rejected: obfuscation rule '{rule}'")
        return Verdict.deny(REASON_OBFUSCATED)

    blocked = _contains_blocked(raw, config.blocked_commands)
    if blocked:
        logger.warning(f"⛔ Command rejected: blocklist entry '{blocked}'")
        return Verdict.deny(REASON_BLOCKED)

    segments = segment(raw)
    if not segments:
        return Verdict.deny(REASON_EMPTY)

    for part in segments:
        blocked = _contains_blocked(part, config.blocked_commands)
        if blocked:
            logger.warning(
                f"⛔ Command rejected: segment matches blocklist entry '{blocked}'"
            )
            return Verdict.deny(REASON_BLOCKED)

        rule = find_obfuscation(part)
        if rule:
            logger.warning(
                f"⛔ Command rejected: segment matches obfuscation rule '{rule}'"
            )
            return Verdict.deny(REASON_OBFUSCATED)

    if config.command_policy_tier == TIER_ALLOWLIST_ONLY:
        for part in segments:
            if not any(
                _matches_allowed_command(part, allowed)
                for allowed in config.allowed_commands
            ):
                logger.warning(
                    f"⛔ Command rejected: {part[:LOG_EXCERPT_LENGTH]!r} not in allowlist"
                )
                return Verdict.deny(REASON_NOT_ALLOWED)
        logger.debug(f"🔒 Command allowed: {len(segments)} segment(s) in allowlist")
        return Verdict.allow("All segments matched the allowlist")

    logger.debug(
        f"🔒 Command allowed under '{config.command_policy_tier}' "
        f"({len(segments)} segment(s))"
    )
    return Verdict.allow()


def evaluate_command(raw: str, config: SecurityConfig | None = None) -> Verdict:
    """
    Evaluate a raw shell command against the active policy.

    Args:
        raw: Command text produced by the agent.
        config: Active security snapshot (None = defaults).

    Returns:
        Verdict with a reason on rejection.
    """
    if config is None:
        config = SecurityConfig()

    try:
        return _evaluate(raw, config)
    except SegmentationError as e:
        logger.warning(f"⛔ Command rejected: {e.message}")
        return Verdict.deny(REASON_UNPARSEABLE)
    except Exception:
        logger.exception("❌ Unexpected error evaluating command, rejecting")
        return Verdict.deny(REASON_ERROR)


def is_command_allowed(raw: str, config: SecurityConfig | None = None) -> bool:
    """
    Boolean shortcut for :func:`evaluate_command`.

    Args:
        raw: Command text produced by the agent.
        config: Active security snapshot (None = defaults).

    Returns:
        True if the command may run.
    """
    return evaluate_command(raw, config).allowed
