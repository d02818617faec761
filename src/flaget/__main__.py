"""
Print how a token sequence is parsed.

    python -m flaget --array files --alias f=files -- build -f a.js b.js

Everything after the tool's own ``--`` (and any positional given before
it) is parsed with the configuration described by the options below,
and the result is printed as JSON:

    --alias KEY=TARGET ...   alias KEY to TARGET
    --array KEY ...          collect KEY into a list
    --boolean KEY ...        always treat KEY as a boolean
    --default KEY=VALUE ...  default for KEY when it is not given
    --names NAME ...         named positionals, "...NAME" for the variadic one
    --legacy                 print the flat get_flags() shape instead
"""

from __future__ import annotations

import json
import sys

from typing import Any
from typing import Sequence

from flaget.parser.api import ParseOptions
from flaget.parser.api import get_flags
from flaget.parser.api import parse
from flaget.parser.errors import ConfigurationError
from flaget.parser.errors import FlagetError
from flaget.parser.scanner import Scanner
from flaget.parser.values import coerce


PROG = "flaget"

OWN_ARRAYS = ("alias", "array", "boolean", "default", "names")
OWN_BOOLEANS = ("legacy",)


class RawScanner(Scanner):
    # Keys, names and KEY=VALUE pairs are taken exactly as typed.
    convert = staticmethod(str)


def _keys(value: Any) -> list[str]:
    if isinstance(value, list):
        return list(value)
    return []


def _pairs(value: Any, option: str) -> dict[str, str]:
    pairs = {}
    for entry in _keys(value):
        key, sep, target = entry.partition("=")
        if not sep:
            raise ConfigurationError(f"expected KEY=VALUE, got {entry!r}", option)
        pairs[key] = target
    return pairs


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # The tool's own options are scanned by the library itself.
    own = ParseOptions(tokens=argv, arrays=OWN_ARRAYS, booleans=OWN_BOOLEANS)
    scanner = RawScanner(own.tokens, own)
    scanner.scan()
    flags = scanner.flags
    tokens = scanner.positionals + scanner.tail

    try:
        aliases = _pairs(flags.get("alias"), "--alias")
        defaults = {
            key: coerce(value)
            for key, value in _pairs(flags.get("default"), "--default").items()
        }
    except FlagetError as e:
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 2

    if flags.get("legacy") is True:
        result = get_flags(
            tokens,
            aliases=aliases,
            arrays=_keys(flags.get("array")),
            defaults=defaults,
        )
    else:
        result = parse(
            tokens,
            named_positionals=_keys(flags.get("names")),
            aliases=aliases,
            arrays=_keys(flags.get("array")),
            booleans=_keys(flags.get("boolean")),
            defaults=defaults,
        ).to_dict()

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
