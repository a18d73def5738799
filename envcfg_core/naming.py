"""Name Deriver.

Maps a (record name, field name) pair onto its environment variable name:
both parts upper-cased, snake-joined, record name first.

    derive_variable_name("TracedConfig", "api_key")  # "TRACED_CONFIG_API_KEY"
"""

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\W_]+")


def to_screaming_snake(identifier: str) -> str:
    """
    Normalize an identifier to SCREAMING_SNAKE_CASE.

    Handles:
    - camelCase / PascalCase: "apiKey" -> "API_KEY"
    - Acronym runs: "HTTPServer" -> "HTTP_SERVER"
    - Digits stay attached to the word before them: "Oauth2Token" -> "OAUTH2_TOKEN"
    - Existing separators ("-", "_", ".", spaces) collapse to one underscore
    - Non-ASCII letters are kept: "größe" -> "GRÖSSE"

    Raises:
        ValueError: identifier has no letters or digits
    """
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", identifier)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    text = _SEPARATORS.sub("_", text).strip("_")
    if not text:
        raise ValueError(f"cannot derive a variable name from {identifier!r}")
    return text.upper()


def derive_variable_name(record_name: str, field_name: str) -> str:
    """Canonical variable name for a field of a record."""
    return f"{to_screaming_snake(record_name)}_{to_screaming_snake(field_name)}"


def resolve_variable_name(record_name: str, field_name: str, override: str | None) -> str:
    """Override wins verbatim; otherwise derive."""
    if override is not None:
        return override
    return derive_variable_name(record_name, field_name)
