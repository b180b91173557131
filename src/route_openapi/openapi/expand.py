"""Expand route regex patterns into OpenAPI path templates.

Only the small set of regex shapes used by route patterns is understood:
optional groups such as ``(leases/)?renew``, one alternation such as
``(raw/?$|raw/(?P<path>.+))`` and named captures ``(?P<name>...)``.
Anything else passes through as a best-effort string.
"""

import re
from collections import deque

from route_openapi.framework.regex import generic_name_body

# Compiled once and shared; never mutated.
REQUIRED_RE = re.compile(r"\(?\?P<(\w+)>[^)]*\)?")  # named parameters, e.g. "(?P<name>regex)"
OPTIONAL_RE = re.compile(r"\(.*?\)\?")  # left-most optional element, e.g. "(leases/)?renew"
ALTERNATION_RE = re.compile(r"\((.*)\|(.*)\)")  # e.g. "(raw/?$|raw/(?P<path>.+))"
BARE_ALTERNATION_RE = re.compile(r"^([^()|]*)\|(.*)$")  # unwrapped form, e.g. "raw/?$|raw/(?P<path>.+)"
CLEAN_CHARS_RE = re.compile(r"[()^$?]")
CLEAN_SUFFIX_RE = re.compile(r"/\?\$?$")

GENERIC_NAME_BODY = generic_name_body()


def expand_pattern(pattern: str) -> list[str]:
    """Expand a route pattern into concrete paths with ``{name}`` placeholders.

    Each optional group doubles the number of paths. Only the first
    alternation group is split; further ones are left as they are.
    """
    # The generic name expression contains optional groups of its own;
    # removing it up front keeps it out of the expansion below.
    if GENERIC_NAME_BODY:
        pattern = pattern.replace(GENERIC_NAME_BODY, "")

    return [_replace_params(path) for path in _expand_optionals(_split_alternation(pattern))]


def _split_alternation(pattern: str) -> list[str]:
    match = ALTERNATION_RE.search(pattern) or BARE_ALTERNATION_RE.search(pattern)
    if match:
        return [match.group(1), match.group(2)]
    return [pattern]


def _expand_optionals(seeds: list[str]) -> list[str]:
    pending = deque(seeds)
    done = []
    while pending:
        path = pending.popleft()
        match = OPTIONAL_RE.search(path)
        if match is None:
            done.append(path)
            continue
        start, end = match.span()
        pending.appendleft(path[:start] + path[end:])
        pending.appendleft(path[:start] + path[start + 1 : end - 2] + path[end:])
    return done


def _replace_params(path: str) -> str:
    for match in list(REQUIRED_RE.finditer(path)):
        path = path.replace(match.group(0), "{%s}" % match.group(1), 1)
    path = CLEAN_SUFFIX_RE.sub("", path)
    return CLEAN_CHARS_RE.sub("", path)
