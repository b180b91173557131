"""Reusable regex fragments for route patterns."""


def generic_name_regex(name: str) -> str:
    """Match a name made of word characters, dashes and dots, not starting or ending with a dash/dot."""
    return f"(?P<{name}>\\w(([\\w-.]+)?\\w)?)"


def optional_param_regex(name: str) -> str:
    """Match an optional trailing ``/value`` segment."""
    return f"(/(?P<{name}>.+))?"


def match_all_regex(name: str) -> str:
    """Match everything after the current position."""
    return f"(?P<{name}>.*)"


def generic_name_body() -> str:
    """Return the inner expression of :func:`generic_name_regex`, without the capture group."""
    base = generic_name_regex("")
    start = base.find(">")
    end = base.rfind(")")
    if start == -1 or end == -1 or end <= start:
        return ""
    return base[start + 1 : end]
