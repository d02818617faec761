from __future__ import annotations


class FlagetError(Exception):
    def __init__(self, msg: str) -> None:
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class ConfigurationError(FlagetError):
    """
    Raised if a parse configuration field is given a value of the
    wrong shape, e.g. a bare string where a sequence of keys is expected.

    Token sequences made of strings never raise: any such input parses.
    """

    def __init__(self, msg: str, field: str | None = None) -> None:
        self.msg = msg
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.msg}"
        return self.msg
