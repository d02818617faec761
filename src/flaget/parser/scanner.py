from __future__ import annotations

import logging

from typing import TYPE_CHECKING
from typing import List
from typing import Sequence
from typing import Union

from flaget.parser.values import Scalar
from flaget.parser.values import coerce
from flaget.parser.values import is_flag_shaped
from flaget.parser.values import resolve_alias
from flaget.parser.values import to_camel_case
from flaget.parser.values import write_mirrored


if TYPE_CHECKING:
    from flaget.parser.api import ParseOptions
    from flaget.parser.values import Flags


logger = logging.getLogger(__name__)

TERMINATOR = "--"
NEGATION_PREFIX = "--no-"
VARIADIC_PREFIX = "..."

NamedValue = Union[str, None, List[str]]


class Scanner:
    """
    Single left-to-right pass over a token sequence.

    Every ``_process_*`` handler receives the index of the token it
    handles and returns the index of the last token it consumed, so
    the main loop always continues at the returned index plus one.
    """

    # Applied to every flag value and array element.
    convert = staticmethod(coerce)

    def __init__(self, tokens: Sequence[str], options: ParseOptions) -> None:
        self.tokens = tokens
        self.aliases = options.aliases
        self.arrays = frozenset(options.arrays)
        self.booleans = frozenset(options.booleans)
        self.defaults = options.defaults
        self.named = options.named_positionals

        self.flags: Flags = {}
        self.positionals: list[str] = []
        self.tail: list[str] = []
        self.bound: dict[str, NamedValue] = {}

    def scan(self) -> None:
        self._process_args()
        self._apply_defaults()
        self.bound = self._bind_positionals()

    # -- Token classification ------------------------------------------

    def _process_args(self) -> None:
        tokens = self.tokens
        i = 0
        while i < len(tokens):
            arg = tokens[i]
            # Bare "-" is left to the positional branch since the short
            # flag case requires at least one character after the dash.
            if arg == TERMINATOR:
                self.tail = list(tokens[i + 1 :])
                logger.debug(
                    "Terminator at index %d, %d token(s) left unparsed",
                    i,
                    len(self.tail),
                )
                return
            if arg[:2] == "--":
                i = self._process_long_opt(i)
            elif arg[:1] == "-" and len(arg) > 1:
                i = self._process_short_opts(i)
            else:
                self.positionals.append(arg)
            i += 1

    def _process_long_opt(self, i: int) -> int:
        arg = self.tokens[i]
        negated = arg.startswith(NEGATION_PREFIX)

        # Value explicitly attached to arg?
        if "=" in arg:
            opt, inline = arg.split("=", 1)
        else:
            opt, inline = arg, None

        start = len(NEGATION_PREFIX) if negated else 2
        key = resolve_alias(opt[start:], self.aliases)

        if negated:
            write_mirrored(self.flags, key, False)
            return i
        if key in self.booleans:
            write_mirrored(self.flags, key, True)
            return i
        if key in self.arrays:
            if inline is not None:
                self._extend(key, [self.convert(inline)])
                return i
            return self._collect(key, i)

        if inline is not None:
            value = self.convert(inline)
        else:
            i, value = self._take_value(i)

        write_mirrored(self.flags, key, value)
        return i

    def _process_short_opts(self, i: int) -> int:
        arg = self.tokens[i]

        # A cluster like -abc only ever toggles booleans.
        if len(arg) > 2:
            for ch in arg[1:]:
                write_mirrored(self.flags, resolve_alias(ch, self.aliases), True)
            return i

        key = resolve_alias(arg[1], self.aliases)

        if key in self.booleans:
            write_mirrored(self.flags, key, True)
            return i
        if key in self.arrays:
            return self._collect(key, i)

        i, value = self._take_value(i)
        write_mirrored(self.flags, key, value)
        return i

    # -- Value lookahead -----------------------------------------------

    def _peek(self, i: int) -> str | None:
        if i + 1 < len(self.tokens):
            return self.tokens[i + 1]
        return None

    def _take_value(self, i: int) -> tuple[int, Scalar]:
        following = self._peek(i)
        if following is None or is_flag_shaped(following):
            return i, True
        return i + 1, self.convert(following)

    def _collect(self, key: str, i: int) -> int:
        values: list[Scalar] = []
        following = self._peek(i)
        while following is not None and not is_flag_shaped(following):
            values.append(self.convert(following))
            i += 1
            following = self._peek(i)

        logger.debug("Collected %d value(s) for array flag %r", len(values), key)
        self._extend(key, values)
        return i

    def _extend(self, key: str, values: list[Scalar]) -> None:
        previous = self.flags.get(key)
        if not isinstance(previous, list):
            # First occurrence, or the key was negated earlier.
            previous = []
        write_mirrored(self.flags, key, previous + values)

    # -- Post-scan -----------------------------------------------------

    def _apply_defaults(self) -> None:
        observed = set(self.flags)
        for key, value in self.defaults.items():
            if key in observed:
                continue
            logger.debug("Applying default for %r", key)
            if isinstance(value, list):
                # Each result gets its own list.
                value = list(value)

            self.flags[key] = value
            camel_key = to_camel_case(key)
            if camel_key not in observed:
                self.flags[camel_key] = value

    def _bind_positionals(self) -> dict[str, NamedValue]:
        bound: dict[str, NamedValue] = {}
        for index, name in enumerate(self.named):
            if name.startswith(VARIADIC_PREFIX):
                # Anything declared after the variadic slot is ignored.
                bound[name[len(VARIADIC_PREFIX) :]] = self.positionals[index:]
                break
            if index < len(self.positionals):
                bound[name] = self.positionals[index]
            else:
                bound[name] = None
        return bound
