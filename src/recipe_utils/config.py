"""Environment-driven settings for the analysis script and web app."""

import dataclasses
import os
from typing import Callable, Mapping, Optional, TypeVar

T = TypeVar("T")

ENV_PREFIX = "RECIPE_UTILS_"


def _read(
    environ: Mapping[str, str], name: str, convert: Callable[[str], T], default: T
) -> T:
    key = ENV_PREFIX + name
    value = environ.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return convert(value.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {key}: {value!r}") from e


@dataclasses.dataclass
class Settings:
    """Runtime settings for ingredient analysis.

    Attributes:
        db_path: Path to the SQLite database.
        acceptance_floor: Minimum score a catalog match must exceed.
        exact_threshold: Scores at or above this are recorded as 'exact'.
        batch_size: Recipes per batch during re-analysis.
        batch_delay: Seconds to pause between batches.
        max_retries: Attempts per recipe on transient store errors.
        max_workers: Thread pool size for line-level matching.
    """

    db_path: str = "data/recipes.db"
    acceptance_floor: float = 0.3
    exact_threshold: float = 0.95
    batch_size: int = 5
    batch_delay: float = 2.0
    max_retries: int = 1
    max_workers: int = 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``RECIPE_UTILS_*`` environment variables.

        Unset or empty variables keep their defaults.

        Raises:
            ValueError: If a variable holds a value of the wrong type.
        """
        if environ is None:
            environ = os.environ
        defaults = cls()
        return cls(
            db_path=_read(environ, "DB_PATH", str, defaults.db_path),
            acceptance_floor=_read(
                environ, "ACCEPTANCE_FLOOR", float, defaults.acceptance_floor
            ),
            exact_threshold=_read(
                environ, "EXACT_THRESHOLD", float, defaults.exact_threshold
            ),
            batch_size=_read(environ, "BATCH_SIZE", int, defaults.batch_size),
            batch_delay=_read(environ, "BATCH_DELAY", float, defaults.batch_delay),
            max_retries=_read(environ, "MAX_RETRIES", int, defaults.max_retries),
            max_workers=_read(environ, "MAX_WORKERS", int, defaults.max_workers),
        )

    def analysis_options(self):
        """Keyword arguments for ``analyze_recipe_ingredients``."""
        return {
            "acceptance_floor": self.acceptance_floor,
            "exact_threshold": self.exact_threshold,
            "max_workers": self.max_workers,
        }
