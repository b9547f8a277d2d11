"""
Scrub secrets out of error text before it is logged.
"""
import re

_PATTERNS = (
    (re.compile(r"password[=:]\s*\S+", re.IGNORECASE), "password=***"),
    (re.compile(r"token[=:]\s*\S+", re.IGNORECASE), "token=***"),
    (re.compile(r"api[_-]?key[=:]\s*\S+", re.IGNORECASE), "api_key=***"),
    (re.compile(r"secret[=:]\s*\S+", re.IGNORECASE), "secret=***"),
    (re.compile(r"\b\d{13,19}\b"), "***"),  # Steam IDs, card-like numbers
    (re.compile(r"Bearer\s+\S+", re.IGNORECASE), "Bearer ***"),
)


def sanitize_error_message(message: str) -> str:
    for pattern, replacement in _PATTERNS:
        message = pattern.sub(replacement, message)
    return message
