"""
Command Segmenter.

Splits a raw shell command into the sub-commands it would execute, at the
control operators ``&&``, ``||``, ``;``, ``|``, ``|&``, ``&`` and newlines.

Does NOT split inside:
- Single-quoted strings ('...')
- Double-quoted strings ("...")
- Parameter expansion (${...})
- Command substitution ($(...) and backticks)
- Process substitution (<(...) and >(...))
- Backslash-escaped characters

A ``#`` that begins a word starts a comment running to the end of the
line, exactly as in sh: the comment is dropped and its quotes or braces
never affect the following lines.

The body of every command or process substitution is itself an execution
path, so it is extracted and segmented recursively. This is a small
explicit scanner, not a shell parser: anything it cannot balance raises
SegmentationError and the caller rejects the command.
"""

from .exceptions import SegmentationError

MAX_SUBSTITUTION_DEPTH = 8

# Characters after which a "#" begins a comment
_WORD_BREAKS = frozenset(" \t\n;&|()<>")


def _starts_comment(text: str, i: int, start: int = 0) -> bool:
    return text[i] == "#" and (i == start or text[i - 1] in _WORD_BREAKS)


def _skip_comment(text: str, i: int) -> int:
    """Return the index of the newline ending the comment at ``i``."""
    end = text.find("\n", i)
    return len(text) if end == -1 else end


def _find_backtick(text: str, start: int) -> int:
    """
    Find the backtick closing a substitution opened just before ``start``.

    Args:
        text: Command text.
        start: Index of the first character after the opening backtick.

    Returns:
        Index of the closing backtick.

    Raises:
        SegmentationError: If the substitution is never closed.
    """
    i = start
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "`":
            return i
        i += 1
    raise SegmentationError("Unterminated backtick substitution", start - 1)


def _find_close_paren(text: str, start: int, nesting: int = 0) -> int:
    """
    Find the parenthesis closing a substitution opened just before ``start``.

    Quotes, comments and nested substitutions inside the body are skipped
    so that a quoted or commented ``)`` does not end the substitution early.

    Args:
        text: Command text.
        start: Index of the first character of the substitution body.
        nesting: How many substitutions enclose this one.

    Returns:
        Index of the matching ``)``.

    Raises:
        SegmentationError: If the substitution is never closed or is
            nested too deeply.
    """
    if nesting > MAX_SUBSTITUTION_DEPTH:
        raise SegmentationError("Command substitution nested too deeply", start - 2)

    depth = 1
    in_single = False
    in_double = False
    i = start

    while i < len(text):
        c = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""

        if in_single:
            if c == "'":
                in_single = False
            i += 1
            continue

        if c == "\\":
            i += 2
            continue

        if c == "`":
            i = _find_backtick(text, i + 1) + 1
            continue

        if c == "$" and nxt == "(":
            i = _find_close_paren(text, i + 2, nesting + 1) + 1
            continue

        if c == "$" and nxt == "{":
            i = _find_close_brace(text, i + 2, [], nesting + 1) + 1
            continue

        if in_double:
            if c == '"':
                in_double = False
            i += 1
            continue

        if _starts_comment(text, i, start):
            i = _skip_comment(text, i)
            continue

        if c == "'":
            in_single = True
        elif c == '"':
            in_double = True
        elif c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1

    raise SegmentationError("Unterminated command substitution", start - 2)


def _find_close_brace(
    text: str, start: int, substitutions: list[str], nesting: int = 0
) -> int:
    """
    Find the brace closing a parameter expansion opened just before ``start``.

    Command substitutions inside the expansion (``${x:-$(cmd)}``) still
    execute, so their bodies are appended to ``substitutions``.

    Args:
        text: Command text.
        start: Index of the first character after ``${``.
        substitutions: Collector for substitution bodies.
        nesting: How many constructs enclose this one.

    Returns:
        Index of the matching ``}``.

    Raises:
        SegmentationError: If the expansion is never closed, crosses a
            line break, or is nested too deeply.
    """
    if nesting > MAX_SUBSTITUTION_DEPTH:
        raise SegmentationError("Parameter expansion nested too deeply", start - 2)

    in_single = False
    in_double = False
    i = start

    while i < len(text):
        c = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""

        if in_single:
            if c == "'":
                in_single = False
            i += 1
            continue

        if c == "\\":
            i += 2
            continue

        if c == "$" and nxt == "(":
            end = _find_close_paren(text, i + 2, nesting + 1)
            substitutions.append(text[i + 2 : end])
            i = end + 1
            continue

        if c == "`":
            end = _find_backtick(text, i + 1)
            substitutions.append(text[i + 1 : end])
            i = end + 1
            continue

        if c == "$" and nxt == "{":
            i = _find_close_brace(text, i + 2, substitutions, nesting + 1) + 1
            continue

        if in_double:
            if c == '"':
                in_double = False
            i += 1
            continue

        if c == "\n":
            raise SegmentationError("Parameter expansion spans lines", start - 2)
        if c == "'":
            in_single = True
        elif c == '"':
            in_double = True
        elif c == "}":
            return i
        i += 1

    raise SegmentationError("Unterminated parameter expansion", start - 2)


def _scan(text: str) -> tuple[list[str], list[str]]:
    """
    Split one level of command text.

    Args:
        text: Command text.

    Returns:
        Tuple of (top-level segments, substitution bodies found).

    Raises:
        SegmentationError: On unbalanced quotes or unterminated constructs.
    """
    segments: list[str] = []
    substitutions: list[str] = []
    current: list[str] = []
    in_single = False
    in_double = False
    i = 0

    def flush() -> None:
        part = "".join(current).strip()
        if part:
            segments.append(part)
        current.clear()

    while i < len(text):
        c = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""
        prev = text[i - 1] if i > 0 else ""

        if in_single:
            current.append(c)
            if c == "'":
                in_single = False
            i += 1
            continue

        # Backslash escapes the next character (outside single quotes)
        if c == "\\":
            current.append(text[i : i + 2])
            i += 2
            continue

        # Substitutions and expansions run even inside double quotes
        if c == "$" and nxt == "(":
            end = _find_close_paren(text, i + 2)
            substitutions.append(text[i + 2 : end])
            current.append(text[i : end + 1])
            i = end + 1
            continue

        if c == "`":
            end = _find_backtick(text, i + 1)
            substitutions.append(text[i + 1 : end])
            current.append(text[i : end + 1])
            i = end + 1
            continue

        if c == "$" and nxt == "{":
            end = _find_close_brace(text, i + 2, substitutions)
            current.append(text[i : end + 1])
            i = end + 1
            continue

        if in_double:
            current.append(c)
            if c == '"':
                in_double = False
            i += 1
            continue

        if _starts_comment(text, i):
            i = _skip_comment(text, i)
            continue

        if c == "'":
            in_single = True
            current.append(c)
            i += 1
            continue

        if c == '"':
            in_double = True
            current.append(c)
            i += 1
            continue

        if c in ("<", ">") and nxt == "(":
            end = _find_close_paren(text, i + 2)
            substitutions.append(text[i + 2 : end])
            current.append(text[i : end + 1])
            i = end + 1
            continue

        if c in (";", "\n"):
            flush()
            i += 1
            continue

        if c == "&":
            if nxt == "&":
                flush()
                i += 2
                continue
            # &> redirects, >& / <& / 2>&1 duplicate descriptors
            if nxt == ">" or prev in ("<", ">"):
                current.append(c)
                i += 1
                continue
            flush()
            i += 1
            continue

        if c == "|":
            # >| is a clobbering redirection, not a pipe
            if prev == ">":
                current.append(c)
                i += 1
                continue
            flush()
            i += 2 if nxt in ("|", "&") else 1
            continue

        current.append(c)
        i += 1

    if in_single or in_double:
        raise SegmentationError("Unbalanced quotes", len(text))

    flush()
    return segments, substitutions


def _segment(text: str, depth: int) -> list[str]:
    if depth > MAX_SUBSTITUTION_DEPTH:
        raise SegmentationError("Command substitution nested too deeply")

    segments, substitutions = _scan(text)
    for body in substitutions:
        segments.extend(_segment(body, depth + 1))
    return segments


def segment(raw: str) -> list[str]:
    """
    Split a raw command into its constituent sub-commands.

    Top-level segments come first, followed by the (recursively segmented)
    bodies of any command or process substitutions. Segments are stripped;
    empty segments and comments are dropped.

    Args:
        raw: Raw command string as produced by the agent.

    Returns:
        List of sub-commands.

    Raises:
        SegmentationError: If quoting or substitution cannot be balanced.
    """
    return _segment(raw, depth=0)
