from __future__ import annotations

import logging
import sys

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Sequence

from flaget.parser.errors import ConfigurationError
from flaget.parser.scanner import NamedValue
from flaget.parser.scanner import Scanner
from flaget.parser.values import FlagValue


logger = logging.getLogger(__name__)


def _check_keys(name: str, keys: Any) -> tuple[str, ...]:
    if isinstance(keys, (str, bytes)):
        raise ConfigurationError(
            f"expected a sequence of strings, got {type(keys).__name__} {keys!r}", name
        )
    try:
        keys = tuple(keys)
    except TypeError:
        raise ConfigurationError(
            f"expected a sequence of strings, got {type(keys).__name__}", name
        ) from None
    for key in keys:
        if not isinstance(key, str):
            raise ConfigurationError(f"invalid entry {key!r}, must be a string", name)
    return keys


def _check_mapping(name: str, mapping: Any, str_values: bool) -> dict[str, Any]:
    if not isinstance(mapping, Mapping):
        raise ConfigurationError(
            f"expected a mapping, got {type(mapping).__name__}", name
        )
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise ConfigurationError(f"invalid key {key!r}, must be a string", name)
        if str_values and not isinstance(value, str):
            raise ConfigurationError(
                f"invalid target {value!r} for {key!r}, must be a string", name
            )
    return dict(mapping)


@dataclass
class ParseOptions:
    """
    Configuration of a single parse call.

    ``tokens`` left as ``None`` means "the running program's
    arguments" and is resolved against ``sys.argv`` when parsing, not
    when the options are created. Entries of ``named_positionals``
    starting with ``...`` capture every remaining positional.
    """

    tokens: Sequence[str] | None = None
    named_positionals: Sequence[str] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    arrays: Iterable[str] = ()
    booleans: Iterable[str] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.tokens is not None:
            self.tokens = list(_check_keys("tokens", self.tokens))
        self.named_positionals = _check_keys(
            "named_positionals", self.named_positionals or ()
        )
        self.aliases = _check_mapping("aliases", self.aliases or {}, True)
        self.arrays = _check_keys("arrays", self.arrays or ())
        self.booleans = _check_keys("booleans", self.booleans or ())
        self.defaults = _check_mapping("defaults", self.defaults or {}, False)

        self._check_conflicts()

    def _check_conflicts(self) -> None:
        for key in sorted(set(self.arrays) & set(self.booleans)):
            logger.warning(
                "Key %r is declared both as array and boolean; "
                "it will be parsed as boolean",
                key,
            )


@dataclass
class Parsed:
    flags: dict[str, FlagValue]
    positionals: list[str]
    tail: list[str]
    named_positionals: dict[str, NamedValue]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse(
    tokens: Sequence[str] | None = None,
    *,
    options: ParseOptions | None = None,
    **kwargs: Any,
) -> Parsed:
    """
    Parse ``tokens`` (default: ``sys.argv[1:]``) into flags,
    positionals and the unparsed tail following ``--``.

    Configuration is passed either as keyword arguments matching the
    fields of :class:`ParseOptions` or as a prepared ``options`` object.

        >>> parse(["build", "--mode=production", "-v"]).flags
        {'mode': 'production', 'v': True}
    """
    if options is None:
        options = ParseOptions(tokens=tokens, **kwargs)
    elif tokens is not None or kwargs:
        raise ConfigurationError(
            "pass either an options object or keyword configuration, not both"
        )

    args = options.tokens
    if args is None:
        logger.debug("No tokens given, parsing sys.argv")
        args = sys.argv[1:]

    scanner = Scanner(args, options)
    scanner.scan()

    return Parsed(
        flags=scanner.flags,
        positionals=scanner.positionals,
        tail=scanner.tail,
        named_positionals=scanner.bound,
    )


def get_flags(
    tokens: Sequence[str] | None = None,
    *,
    aliases: Mapping[str, str] | None = None,
    arrays: Iterable[str] | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Flat variant of :func:`parse`: flags are returned at the top level
    and every non-flag token, including those after ``--``, is listed
    under the ``"_"`` key.
    """
    parsed = parse(tokens, aliases=aliases, arrays=arrays, defaults=defaults)

    flags: dict[str, Any] = dict(parsed.flags)
    flags["_"] = parsed.positionals + parsed.tail
    return flags
