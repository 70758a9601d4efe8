"""
Sensitive value detection and masking for diagnostic output.

Config keys are matched word by word. `db.password`, `DB_PASSWORD`,
`client-secret` and `aws.secretAccessKey` are all split into lowercase
words first, so `cache.keyspace` or `monkey.count` never match by accident.
Credentials embedded in connection URLs are masked in place:

    mask_value("db.url", "postgres://app:hunter2@db:5432/app")
    # => "postgres://app:[REDACTED]@db:5432/app"
"""
import os
import re
from typing import Any, FrozenSet, List, Set, Tuple

SENSITIVE_KEY_WORDS: Set[str] = {
    "password", "passwd", "pwd", "passphrase",
    "secret", "secrets", "token", "tokens",
    "credential", "credentials", "apikey", "authorization",
}

SENSITIVE_KEY_PAIRS: FrozenSet[Tuple[str, str]] = frozenset({
    ("api", "key"),
    ("access", "key"),
    ("private", "key"),
    ("secret", "key"),
    ("client", "secret"),
})

SENSITIVE_VALUE_PREFIXES = [
    'sk-', 'pk-', 'Bearer ', 'Basic ', 'eyJ', 'ghp_', 'xoxb-', 'AKIA'
]

REDACTED = '[REDACTED]'

_WORD_SEPARATORS = re.compile(r'[._\-\s/:\[\]]+')
_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')
_URL_USERINFO = re.compile(r'(?P<head>[A-Za-z][A-Za-z0-9+.\-]*://[^:/@\s]*:)(?P<password>[^@/\s]+)(?P<tail>@)')

_log_mask = os.getenv('CONFIG_LOG_MASK', '').lower() != 'false'


def set_log_mask(enabled: bool) -> None:
    global _log_mask
    _log_mask = enabled


def is_log_mask_enabled() -> bool:
    return _log_mask


def register_sensitive_word(word: str) -> None:
    """Treat every key containing word (case-insensitive) as sensitive."""
    SENSITIVE_KEY_WORDS.add(word.lower())


def key_words(key: str) -> List[str]:
    """Split a config key into lowercase words: 'aws.secretAccessKey' -> ['aws', 'secret', 'access', 'key']."""
    words = []
    for part in _WORD_SEPARATORS.split(key):
        words.extend(w.lower() for w in _CAMEL_BOUNDARY.split(part) if w)
    return words


def is_sensitive_key(key: str) -> bool:
    words = key_words(key)
    if any(w in SENSITIVE_KEY_WORDS for w in words):
        return True
    return any(pair in SENSITIVE_KEY_PAIRS for pair in zip(words, words[1:]))


def is_sensitive_value(value: str) -> bool:
    if not value:
        return False
    return any(value.startswith(p) for p in SENSITIVE_VALUE_PREFIXES)


def mask_url_credentials(value: str) -> str:
    return _URL_USERINFO.sub(lambda m: f"{m.group('head')}{REDACTED}{m.group('tail')}", value)


def mask_value(key: str, value: Any) -> str:
    """Render value for logs, hiding credentials unless masking is off."""
    val_str = str(value)
    if not _log_mask or not val_str:
        return val_str

    if is_sensitive_key(key) or is_sensitive_value(val_str):
        return REDACTED

    return mask_url_credentials(val_str)
