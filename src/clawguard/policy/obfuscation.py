"""
Obfuscation Detector.

Conservative pattern table of evasion idioms: decode pipelines, remote
fetch-and-exec, and reverse shells. False positives are acceptable; the
table is a minimum bar and is expected to grow.

Every pattern is matched against the text as written and against a
normalized copy with quotes and backslashes removed, so ``b''ase64 -d``
and ``ba\\se64 -d`` are caught as well.
"""

import logging
import re

from .exceptions import SegmentationError
from .segmenter import segment

logger = logging.getLogger(__name__)

_SHELLS = r"(?:ba|z|da|k|c|tc|fi|a)?sh"
_INTERPRETERS = rf"(?:{_SHELLS}|python[0-9.]*|perl|ruby|node|php|lua|osascript)"
_FETCHERS = r"(?:curl|wget|fetch)"

OBFUSCATION_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    # Encoding / decoding
    (
        "base64/base32 decode",
        re.compile(
            r"\bbase(?:64|32)\b[^;&|\n]*\s(?:-[a-zA-Z]*d[a-zA-Z]*|--decode)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "openssl decode",
        re.compile(
            r"\bopenssl\b[^;&|\n]*\b(?:base64|enc)\b[^;&|\n]*\s-d\b",
            re.IGNORECASE,
        ),
    ),
    (
        "hex dump reversal",
        re.compile(r"\bxxd\b[^;&|\n]*\s-[a-zA-Z]*r", re.IGNORECASE),
    ),
    (
        "inline decoder call",
        re.compile(
            r"\b(?:b64decode|b32decode|a85decode|base64_decode|decodebytes"
            r"|unhexlify|fromhex)\b|\batob\s*\(",
            re.IGNORECASE,
        ),
    ),
    (
        "hex-escaped payload piped to interpreter",
        re.compile(
            rf"\\x[0-9a-f]{{2}}[^|]*\|\s*(?:sudo\s+)?{_INTERPRETERS}\b",
            re.IGNORECASE,
        ),
    ),
    (
        "ANSI-C escaped text",
        re.compile(
            r"\$'[^']*\\(?:x[0-9a-f]{1,2}|[0-7]{1,3}|u[0-9a-f]{1,4})",
            re.IGNORECASE,
        ),
    ),
    (
        "IFS word splitting",
        re.compile(r"\$\{?IFS\b"),
    ),
    # Remote fetch-and-exec
    (
        "remote content piped to interpreter",
        re.compile(
            rf"\b{_FETCHERS}\b[^;&\n]*\|\s*(?:sudo\s+)?(?:env\s+)?"
            rf"(?:{_INTERPRETERS}\b|source\b|\.\s)",
            re.IGNORECASE,
        ),
    ),
    (
        "remote content in substitution",
        re.compile(rf"(?:\$\(|`|<\()\s*(?:sudo\s+)?{_FETCHERS}\b", re.IGNORECASE),
    ),
    (
        "eval of remote content",
        re.compile(rf"\beval\b.*\b{_FETCHERS}\b", re.IGNORECASE),
    ),
    (
        "downloaded file made executable",
        re.compile(rf"\b{_FETCHERS}\b.*\bchmod\b", re.IGNORECASE),
    ),
    # Reverse shells
    (
        "network device redirection",
        re.compile(r"/dev/(?:tcp|udp)/", re.IGNORECASE),
    ),
    (
        "netcat command execution",
        re.compile(
            r"\b(?:nc|ncat|netcat)\b[^;&|\n]*\s"
            r"(?:-[a-zA-Z]*[ec][a-zA-Z]*|--exec|--sh-exec|--lua-exec)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "interactive shell with descriptor redirection",
        re.compile(
            rf"\b{_SHELLS}\s+(?:-[a-zA-Z]+\s+)*-[a-zA-Z]*i[a-zA-Z]*\b"
            r"[^;|\n]*(?:>&|<&|&>|[0-9]>&)",
            re.IGNORECASE,
        ),
    ),
    (
        "named pipe relay",
        re.compile(
            r"\bmkfifo\b.*\b(?:nc|ncat|netcat|telnet|openssl)\b", re.IGNORECASE
        ),
    ),
    (
        "socat exec",
        re.compile(r"\bsocat\b.*\b(?:exec|system):", re.IGNORECASE),
    ),
    (
        "telnet shell relay",
        re.compile(rf"\btelnet\b.*\|\s*{_SHELLS}\b", re.IGNORECASE),
    ),
    (
        "scripted socket shell",
        re.compile(
            r"\bsocket\b.*\b(?:dup2|subprocess|exec)\b|\bpty\.spawn\b",
            re.IGNORECASE,
        ),
    ),
]

_QUOTING = str.maketrans("", "", "'\"\\")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Strip quoting and collapse whitespace.

    Args:
        text: Command text.

    Returns:
        Text with quotes and backslashes removed and whitespace runs
        collapsed to a single space.
    """
    return _WHITESPACE.sub(" ", text.translate(_QUOTING)).strip()


def find_obfuscation(text: str) -> str | None:
    """
    Match a single string against the pattern table.

    Args:
        text: Raw command or one of its segments.

    Returns:
        Name of the first matching rule, or None.
    """
    candidates = (text, normalize(text))
    for name, pattern in OBFUSCATION_PATTERNS:
        if any(pattern.search(candidate) for candidate in candidates):
            return name
    return None


def looks_obfuscated(raw: str) -> bool:
    """
    Check a command and each of its segments for evasion idioms.

    A command that cannot be segmented is treated as obfuscated.

    Args:
        raw: Raw command string.

    Returns:
        True if any rule matches the raw string or any segment.
    """
    rule = find_obfuscation(raw)
    if rule:
        logger.debug(f"🔒 Obfuscation rule '{rule}' matched raw command")
        return True

    try:
        segments = segment(raw)
    except SegmentationError as e:
        logger.debug(f"🔒 Unsegmentable command treated as obfuscated: {e}")
        return True

    for part in segments:
        rule = find_obfuscation(part)
        if rule:
            logger.debug(f"🔒 Obfuscation rule '{rule}' matched segment")
            return True
    return False
