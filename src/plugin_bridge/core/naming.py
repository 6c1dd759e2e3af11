"""
Identifier normalization for target naming rules.

Targets accept identifiers matching ``^[a-z][a-z0-9_-]*$`` up to a maximum
length. normalize_name() maps any source name onto that grammar;
NameRegistry + unique_name() keep identifiers unique within one namespace
for a single conversion run.
"""

import re
from typing import Iterable, Set

DEFAULT_MAX_NAME_LENGTH = 64
DEFAULT_MAX_DESCRIPTION_LENGTH = 1024
FALLBACK_NAME = "item"

_RE_PATH_SEPARATORS = re.compile(r"[\\/]+")
_RE_COLON_WHITESPACE = re.compile(r"[:\s]+")
_RE_ILLEGAL = re.compile(r"[^a-z0-9_-]+")
_RE_HYPHENS = re.compile(r"-+")
_RE_WHITESPACE = re.compile(r"\s+")


def normalize_name(value: str, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> str:
    """
    Turn an arbitrary source name into a target-legal identifier.

    Pure: the same input always gives the same output. Uniqueness is not
    guaranteed here (see unique_name).

    >>> normalize_name("Code Reviewer")
    'code-reviewer'
    >>> normalize_name("workflows:plan")
    'workflows-plan'
    """
    trimmed = value.strip()
    if not trimmed:
        return FALLBACK_NAME

    normalized = trimmed.lower()
    normalized = _RE_PATH_SEPARATORS.sub("-", normalized)
    normalized = _RE_COLON_WHITESPACE.sub("-", normalized)
    normalized = _RE_ILLEGAL.sub("-", normalized)
    normalized = _RE_HYPHENS.sub("-", normalized)
    normalized = normalized.strip("-")

    if len(normalized) > max_length:
        normalized = normalized[:max_length]
        last_hyphen = normalized.rfind("-")
        if last_hyphen > 0:
            normalized = normalized[:last_hyphen]
        normalized = normalized.rstrip("-")

    if not normalized or not ("a" <= normalized[0] <= "z"):
        return FALLBACK_NAME

    return normalized


class NameRegistry:
    """Identifiers already allocated in one namespace during one run."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: Set[str] = set(names)

    def reserve(self, name: str) -> None:
        self._names.add(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)


def unique_name(base: str, registry: NameRegistry) -> str:
    """Reserve and return base, or the first free base-2, base-3, ..."""
    if base not in registry:
        registry.reserve(base)
        return base

    index = 2
    while f"{base}-{index}" in registry:
        index += 1
    name = f"{base}-{index}"
    registry.reserve(name)
    return name


def sanitize_description(value: str, max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH) -> str:
    """Collapse whitespace and cap length, ending truncated text with '...'."""
    normalized = _RE_WHITESPACE.sub(" ", value).strip()
    if len(normalized) <= max_length:
        return normalized
    ellipsis = "..."
    if max_length <= len(ellipsis):
        return normalized[:max_length]
    return normalized[: max_length - len(ellipsis)].rstrip() + ellipsis
