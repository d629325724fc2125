"""
Field name transcoding between the provider's PascalCase wire format and
the camelCase convention used by the geo object model.
"""

from typing import Any, Callable


def _camel_key(key: Any) -> Any:
    """
    Lower the leading capital run of a key.

    An acronym prefix keeps its last capital when a lowercase letter follows
    it ("HTTPHeaders" -> "httpHeaders"); acronym-only keys are lowered whole
    ("ID" -> "id").
    """
    if not isinstance(key, str) or not key:
        return key
    if key.isupper():
        return key.lower()

    run = 0
    while run < len(key) and key[run].isupper():
        run += 1
    if run > 1 and run < len(key) and key[run].islower():
        run -= 1
    return key[:run].lower() + key[run:]


def _pascal_key(key: Any) -> Any:
    if not isinstance(key, str) or not key:
        return key
    return key[0].upper() + key[1:]


def _transcode(data: Any, convert_key: Callable[[Any], Any]) -> Any:
    if isinstance(data, dict):
        return {
            convert_key(key): _transcode(value, convert_key)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [_transcode(item, convert_key) for item in data]
    if isinstance(data, tuple):
        return tuple(_transcode(item, convert_key) for item in data)
    return data


class CaseMapper:
    """
    Recursively rewrites map keys, including maps nested in sequences.

    Scalars and non-map sequence elements pass through untouched. Both
    directions are idempotent: mapping data already in the target casing
    returns an equal structure. They are not inverses for acronym keys:
    to_pascal(to_camel("ID")) is "Id" and "HTTPHeaders" comes back as
    "HttpHeaders".
    """

    @staticmethod
    def to_camel(data: Any) -> Any:
        """PascalCase keys (provider) -> camelCase keys (internal)."""
        return _transcode(data, _camel_key)

    @staticmethod
    def to_pascal(data: Any) -> Any:
        """camelCase keys (internal) -> PascalCase keys (provider)."""
        return _transcode(data, _pascal_key)
