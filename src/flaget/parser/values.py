from __future__ import annotations

import re

from typing import Dict
from typing import List
from typing import Mapping
from typing import Union


Scalar = Union[bool, int, float, str]
FlagValue = Union[Scalar, List[Scalar]]
Flags = Dict[str, FlagValue]

_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_CAMEL_RE = re.compile(r"-([a-z])")


def coerce(value: str) -> Scalar:
    """
    Convert a raw token to a boolean, a number or leave it as is.

    Only the literals "true" and "false" become booleans. Integer
    literals ("42", "-7", "008") become ``int``, decimal literals
    ("3.14") become ``float``; nothing else (hex, exponents, "1.")
    is treated as a number.
    """
    if value == "true":
        return True
    if value == "false":
        return False

    match = _NUMBER_RE.fullmatch(value)
    if match is None:
        return value
    if match.group(1):
        return float(value)
    return int(value)


def is_flag_shaped(token: str | None) -> bool:
    # "-5" counts as a flag here, so it never becomes a flag value.
    return token is not None and token[:1] == "-"


def to_camel_case(key: str) -> str:
    """foo-bar -> fooBar"""
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), key)


def resolve_alias(key: str, aliases: Mapping[str, str]) -> str:
    # Single hop: the target is never looked up again.
    return aliases.get(key) or key


def write_mirrored(flags: Flags, key: str, value: FlagValue) -> None:
    """
    Store ``value`` under ``key`` and, when it differs, under the
    camelCase form of ``key`` as well.
    """
    flags[key] = value

    camel_key = to_camel_case(key)
    if camel_key != key:
        flags[camel_key] = value
