"""Central location for defaults and runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

# Column width used whenever sequences are written back to FASTA
LINE_WIDTH = 80

ENVIRONMENT_VARIABLES = (
    "FASTAKIT_VERBOSE",
    "FASTAKIT_SPLIT_COUNT",
    "FASTAKIT_SPLIT_SIZE_MB",
    "FASTAKIT_SPLIT_PREFIX",
    "FASTAKIT_JSON_INDENT",
)

PathLike = Union[str, Path]


@dataclass(slots=True)
class SplitDefaults:
    """Default values for split command arguments."""

    count: int = 100
    size_mb: float = 10.0
    prefix: str = "split"


@dataclass(slots=True)
class SearchDefaults:
    """Default values for pattern search."""

    context: int = 10


@dataclass(slots=True)
class RuntimeConfig:
    """Settings resolved from the environment (and .env) at startup."""

    verbose: bool = False
    split_count: int = 100
    split_size_mb: float = 10.0
    split_prefix: str = "split"
    json_indent: int = 2


SPLIT_DEFAULTS = SplitDefaults()
SEARCH_DEFAULTS = SearchDefaults()


def find_env_file(start_path: Optional[PathLike] = None) -> Optional[Path]:
    """Search for the closest .env file starting from start_path or CWD."""
    search_root = Path(start_path).resolve() if start_path else Path.cwd().resolve()
    for candidate_dir in (search_root, *search_root.parents):
        candidate = candidate_dir / ".env"
        if candidate.is_file():
            return candidate
    return None


def load_env(start_path: Optional[PathLike] = None) -> Optional[Path]:
    """Load .env values into os.environ without overriding pre-existing values."""
    env_path = find_env_file(start_path)
    if not env_path:
        return None

    load_dotenv(env_path, override=False)
    return env_path


def collect_runtime_config(start_path: Optional[PathLike] = None) -> RuntimeConfig:
    """Ensure the .env file is sourced and expose the values as a dataclass."""
    load_env(start_path)
    env = os.environ
    return RuntimeConfig(
        verbose=_env_bool(env.get("FASTAKIT_VERBOSE"), False),
        split_count=_env_int(env.get("FASTAKIT_SPLIT_COUNT"), SPLIT_DEFAULTS.count),
        split_size_mb=_env_float(env.get("FASTAKIT_SPLIT_SIZE_MB"), SPLIT_DEFAULTS.size_mb),
        split_prefix=(env.get("FASTAKIT_SPLIT_PREFIX") or "").strip() or SPLIT_DEFAULTS.prefix,
        json_indent=_env_int(env.get("FASTAKIT_JSON_INDENT"), 2),
    )


def _env_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(raw: Optional[str], default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default
