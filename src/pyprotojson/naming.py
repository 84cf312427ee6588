"""Naming policies mapping field property names to JSON keys."""

from __future__ import annotations

import enum
import re

from pyprotojson._errors import ERR_MSG_UNKNOWN_NAMING_POLICY, InvalidNamingPolicyError
from pyprotojson.options import NamingPolicy

__all__ = [
    "NamingPolicyName",
    "camel_case",
    "get_naming_policy",
    "kebab_case_lower",
    "kebab_case_upper",
    "pascal_case",
    "snake_case_lower",
    "snake_case_upper",
    "split_words",
]

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*|[0-9]+")
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


class NamingPolicyName(enum.StrEnum):
    CAMEL_CASE = "camel_case"
    PASCAL_CASE = "pascal_case"
    SNAKE_CASE_LOWER = "snake_case_lower"
    SNAKE_CASE_UPPER = "snake_case_upper"
    KEBAB_CASE_LOWER = "kebab_case_lower"
    KEBAB_CASE_UPPER = "kebab_case_upper"


def split_words(name: str) -> list[str]:
    """Split a snake_case, kebab-case, camelCase or PascalCase name into words.

    Acronyms stay together: ``"HTTPServer"`` splits into ``["HTTP", "Server"]``.
    """
    words: list[str] = []
    for chunk in _SEPARATOR_RE.split(name):
        words.extend(_WORD_RE.findall(chunk))
    return words


def camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def pascal_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "".join(w.capitalize() for w in words)


def snake_case_lower(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name)) or name


def snake_case_upper(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name)) or name


def kebab_case_lower(name: str) -> str:
    return "-".join(w.lower() for w in split_words(name)) or name


def kebab_case_upper(name: str) -> str:
    return "-".join(w.upper() for w in split_words(name)) or name


_REGISTRY: dict[str, NamingPolicy] = {
    NamingPolicyName.CAMEL_CASE: camel_case,
    NamingPolicyName.PASCAL_CASE: pascal_case,
    NamingPolicyName.SNAKE_CASE_LOWER: snake_case_lower,
    NamingPolicyName.SNAKE_CASE_UPPER: snake_case_upper,
    NamingPolicyName.KEBAB_CASE_LOWER: kebab_case_lower,
    NamingPolicyName.KEBAB_CASE_UPPER: kebab_case_upper,
}


def get_naming_policy(name: str) -> NamingPolicy:
    """Get a naming policy function by name.

    Args:
        name: Policy name (e.g., "camel_case", "snake_case_lower").

    Returns:
        The naming policy function.

    Raises:
        InvalidNamingPolicyError: If the policy name is unknown.
    """
    policy = _REGISTRY.get(name)
    if policy is None:
        raise InvalidNamingPolicyError(
            ERR_MSG_UNKNOWN_NAMING_POLICY,
            f"unknown naming policy: {name!r}. "
            f"Available: {', '.join(sorted(_REGISTRY))}",
        )
    return policy
