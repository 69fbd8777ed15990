import json
from dataclasses import dataclass, fields
from typing import Any

from typing_extensions import override

from caldiff.util import UNIT_LETTERS


@dataclass(frozen=True, kw_only=True)
class Duration:
    """Calendar-aware span broken into years, months, days and clock units.

    Carries no sign: ``between`` orders its arguments before building one.
    Hours are not reduced modulo 24.
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"Duration {field.name} must be an int.\n"
                    f"Got {type(value).__name__!r}: {value!r}"
                )
            if value < 0:
                raise ValueError(
                    f"Duration {field.name} must be >= 0, got {value}.\n"
                    f"Hint: between() orders its arguments, so spans are never negative"
                )

    def format(self) -> str:
        """Compact form such as "1y 6m 8d 5h 8m 17s", or "0s" when empty.

        Zero fields are omitted; months and minutes both render as "m" and
        are told apart by position only.
        """
        parts = [
            f"{getattr(self, name)}{letter}"
            for name, letter in UNIT_LETTERS
            if getattr(self, name) != 0
        ]
        return " ".join(parts) if parts else "0s"

    def to_json(self) -> str:
        """JSON string value holding the formatted duration."""
        return json.dumps(self.format())

    @override
    def __str__(self) -> str:
        return self.format()


class DurationEncoder(json.JSONEncoder):
    """Encode Duration values nested in larger structures as their compact string.

    Example:
        >>> json.dumps({"uptime": Duration(days=2, hours=1)}, cls=DurationEncoder)
        '{"uptime": "2d 1h"}'
    """

    @override
    def default(self, o: Any) -> Any:
        if isinstance(o, Duration):
            return o.format()
        return super().default(o)
