"""
Naming convention utilities for prisma-casemap.

This module converts the identifiers found in a schema (typically the
snake_case names introspected from a database) into the conventions client
code expects: UpperCamelCase for models and lowerCamelCase for fields and
index names.

Word boundaries are found the same way for both conventions:
- any run of non-alphanumeric characters (including `_`) separates words
- a lowercase letter or a digit followed by an uppercase letter starts a new word
- in a run of capitals followed by a lowercase letter, the last capital
  starts a new word (`HTTPServer` -> `HTTP`, `Server`)

When the identifier contains separators it is treated as snake_case and
every word is normalized to a capital initial followed by lowercase letters.
Identifiers without separators are already camel-like; only word initials
are adjusted so acronyms survive and re-running a conversion is a no-op.
"""

import re
from typing import List


_SEPARATOR_RE = re.compile(r"[\W_]+")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

_BOUNDARY = "boundary"
_LOWER = "lower"
_UPPER = "upper"


def _split_chunk(chunk: str) -> List[str]:
    """Split one separator-free chunk on case boundaries."""
    words = []
    start = 0
    mode = _BOUNDARY

    for i in range(len(chunk) - 1):
        current, following = chunk[i], chunk[i + 1]

        if current.islower():
            next_mode = _LOWER
        elif current.isupper():
            next_mode = _UPPER
        else:
            next_mode = mode

        if following.isupper() and (next_mode == _LOWER or current.isdigit()):
            # Boundary after the current character
            words.append(chunk[start:i + 1])
            start = i + 1
            mode = _BOUNDARY
        elif mode == _UPPER and current.isupper() and following.islower():
            # End of an acronym: boundary before the current character
            words.append(chunk[start:i])
            start = i
            mode = _BOUNDARY
        else:
            mode = next_mode

    words.append(chunk[start:])
    return words


def split_words(name: str) -> List[str]:
    """
    Split an identifier into its words.

    Example:
        >>> split_words("user_agent_issued_to")
        ['user', 'agent', 'issued', 'to']
        >>> split_words("XMLHttpRequest2Go")
        ['XML', 'Http', 'Request2', 'Go']
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    words = []
    for chunk in _SEPARATOR_RE.split(name):
        if chunk:
            words.extend(_split_chunk(chunk))
    return words


def has_separators(name: str) -> bool:
    """Check whether the identifier contains `_` or other separator characters."""
    return bool(_SEPARATOR_RE.search(name))


def _capitalize(word: str, lowercase_tail: bool) -> str:
    tail = word[1:].lower() if lowercase_tail else word[1:]
    return word[:1].upper() + tail


def to_upper_camel_case(name: str) -> str:
    """
    Convert an identifier to UpperCamelCase (model names).

    Args:
        name: The identifier to convert

    Returns:
        The converted identifier; an identifier without any alphanumeric
        characters converts to an empty string

    Example:
        >>> to_upper_camel_case("auth_otp")
        'AuthOtp'
        >>> to_upper_camel_case("AuthOtp")
        'AuthOtp'
        >>> to_upper_camel_case("USER_ACCOUNTS")
        'UserAccounts'
    """
    words = split_words(name)
    snake = has_separators(name)
    return "".join(_capitalize(word, snake) for word in words)


def to_lower_camel_case(name: str) -> str:
    """
    Convert an identifier to lowerCamelCase (field and index names).

    Example:
        >>> to_lower_camel_case("ip_address_issued_to")
        'ipAddressIssuedTo'
        >>> to_lower_camel_case("userId")
        'userId'
    """
    words = split_words(name)
    if not words:
        return ""
    snake = has_separators(name)
    head = words[0].lower()
    return head + "".join(_capitalize(word, snake) for word in words[1:])


def is_valid_schema_identifier(name: str) -> bool:
    """Check if a string can be used as a model or field name."""
    return bool(name) and _IDENTIFIER_RE.match(name) is not None


class NamingConventions:
    """
    Centralized naming convention utilities.

    This class provides consistent naming across the codebase.
    """

    @staticmethod
    def model_name(name: str) -> str:
        """Convert a model name to its client-facing form."""
        return to_upper_camel_case(name)

    @staticmethod
    def field_name(name: str) -> str:
        """Convert a field name to its client-facing form."""
        return to_lower_camel_case(name)

    @staticmethod
    def index_name(db_name: str) -> str:
        """Derive an index's client-facing name from its storage name."""
        return to_lower_camel_case(db_name)

    @staticmethod
    def is_valid_identifier(name: str) -> bool:
        return is_valid_schema_identifier(name)
