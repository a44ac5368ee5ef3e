"""
Runtime configuration for the parser front ends.

Values come from environment variables and can be overridden by command-line
flags:

- TURKMORF_LEXICON: path of the lexicon file (default: the bundled lexicon)
- TURKMORF_WORKERS: thread count for batch parsing (default: 4)
- TURKMORF_TIMEOUT: per-word parse timeout in seconds, 0 disables (default: 0)
- TURKMORF_LOG_LEVEL: logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


@dataclass(frozen=True)
class ParserConfig:
    lexicon_path: Optional[str] = None
    workers: int = DEFAULT_WORKERS
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserConfig":
        """
        Build a config from environment variables.

        Raises:
            ValueError: if a numeric variable does not parse or is out of range.
        """
        if environ is None:
            environ = os.environ

        workers = _parse_number(environ, "TURKMORF_WORKERS", int, DEFAULT_WORKERS)
        if workers < 1:
            raise ValueError(f"TURKMORF_WORKERS must be at least 1, got {workers}")

        timeout = _parse_number(environ, "TURKMORF_TIMEOUT", float, 0.0)
        if timeout < 0:
            raise ValueError(f"TURKMORF_TIMEOUT must not be negative, got {timeout}")

        log_level = environ.get("TURKMORF_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown TURKMORF_LOG_LEVEL {log_level!r}")

        return cls(
            lexicon_path=environ.get("TURKMORF_LEXICON") or None,
            workers=workers,
            timeout=timeout or None,
            log_level=log_level,
        )

    def with_overrides(self, **overrides) -> "ParserConfig":
        """Copy with every override that is not None applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def _parse_number(environ, name, kind, default):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e
