from importlib.resources import files

from .core import add_date, between, coerce_instant, coerce_zone, since, utc_now
from .duration import Duration, DurationEncoder
from .util import DAY, HOUR, MINUTE, SECOND

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Duration",
    "DurationEncoder",
    "between",
    "since",
    "add_date",
    "coerce_instant",
    "coerce_zone",
    "utc_now",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "docs",
]
