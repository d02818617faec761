from __future__ import annotations

from flaget.parser.api import ParseOptions
from flaget.parser.api import Parsed
from flaget.parser.api import get_flags
from flaget.parser.api import parse
from flaget.parser.errors import ConfigurationError
from flaget.parser.errors import FlagetError
from flaget.parser.values import coerce
from flaget.parser.values import to_camel_case


__all__ = [
    "ConfigurationError",
    "FlagetError",
    "ParseOptions",
    "Parsed",
    "coerce",
    "get_flags",
    "parse",
    "to_camel_case",
]
