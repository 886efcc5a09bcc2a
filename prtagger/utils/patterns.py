# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Path glob matching for changed-file filters.

Patterns follow the minimatch defaults used by GitHub Actions authors:
    - ``*``, ``?`` and ``[...]`` match within one path segment; ``[!...]`` and
      ``[^...]`` both negate a class
    - a pattern ending in ``/`` names a directory and matches no changed file
    - a ``**`` segment matches zero or more whole segments
    - ``{a,b}`` expands to alternatives
    - a leading ``!`` negates the pattern
    - wildcards never match a segment starting with ``.`` unless the pattern
      segment itself starts with ``.``
"""

import fnmatch
from typing import Iterable, List, Sequence

GLOBSTAR = '**'


def expand_braces(pattern: str) -> List[str]:
    """Expand the first top-level ``{a,b}`` group, recursively.

    Groups without a comma (``{a}``) are left untouched.
    """
    depth = 0
    start = -1
    has_comma = False
    for i, char in enumerate(pattern):
        if char == '{':
            if depth == 0:
                start = i
                has_comma = False
            depth += 1
        elif char == '}' and depth > 0:
            depth -= 1
            if depth == 0 and has_comma:
                prefix, body, suffix = pattern[:start], pattern[start + 1 : i], pattern[i + 1 :]
                expanded: List[str] = []
                for option in _split_top_level(body):
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
        elif char == ',' and depth == 1:
            has_comma = True
    return [pattern]


def _split_top_level(body: str) -> List[str]:
    parts, depth, current = [], 0, ''
    for char in body:
        if char == ',' and depth == 0:
            parts.append(current)
            current = ''
            continue
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
        current += char
    parts.append(current)
    return parts


def _negate_classes(pattern: str) -> str:
    """Spell ``[^...]`` classes the way fnmatch reads negation, ``[!...]``."""
    out = []
    i = 0
    while i < len(pattern):
        if pattern[i] != '[':
            out.append(pattern[i])
            i += 1
            continue
        # a "]" right after the opening bracket (or its negation) is a member, not the end
        end = i + 1
        if end < len(pattern) and pattern[end] in '!^':
            end += 1
        if end < len(pattern) and pattern[end] == ']':
            end += 1
        end = pattern.find(']', end)
        if end == -1:
            out.append(pattern[i:])
            break
        body = pattern[i + 1 : end]
        if body.startswith('^'):
            body = '!' + body[1:]
        out.append(f'[{body}]')
        i = end + 1
    return ''.join(out)


def _match_segment(pattern: str, name: str) -> bool:
    if name.startswith('.') and not pattern.startswith('.'):
        return False
    return fnmatch.fnmatchcase(name, _negate_classes(pattern))


def _match_parts(pattern_parts: Sequence[str], path_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not path_parts

    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == GLOBSTAR:
        for i in range(len(path_parts) + 1):
            if i > 0 and path_parts[i - 1].startswith('.'):
                break
            if _match_parts(rest, path_parts[i:]):
                return True
        return False

    if not path_parts:
        return False
    return _match_segment(head, path_parts[0]) and _match_parts(rest, path_parts[1:])


def _split(path: str) -> List[str]:
    # a trailing slash survives as an empty last segment, which no file name matches
    if path.startswith('./'):
        path = path[2:]
    parts = path.split('/')
    return [part for part in parts[:-1] if part] + parts[-1:]


def path_matches_pattern(path: str, pattern: str) -> bool:
    """Check if a repository-relative path matches one glob pattern.

    Args:
        path (str): Changed file path as reported by GitHub, e.g. "src/app/main.py".
        pattern (str): Glob pattern, e.g. "src/**/*.py".

    Returns:
        bool: True if the path matches.
    """
    negated = False
    while pattern.startswith('!'):
        negated = not negated
        pattern = pattern[1:]

    path_parts = _split(path)
    matched = any(_match_parts(_split(option), path_parts) for option in expand_braces(pattern))
    return matched != negated


def path_matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Check if a path matches any pattern in the list. Empty list matches nothing."""
    return any(path_matches_pattern(path, pattern) for pattern in patterns)
