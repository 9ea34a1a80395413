"""Finds and reads pipes.yaml, expanding ${VAR} references from the environment."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PipesConfig

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """Config locations in priority order: --config, project, user home."""
    candidates = [Path("./pipes.yaml"), Path.home() / ".pipes" / "config.yaml"]
    if cli_path:
        explicit = Path(cli_path)
        if not explicit.exists():
            raise ValueError(f"Config file not found: {cli_path}")
        candidates.insert(0, explicit)
    return candidates


def _read_config_file(path: Path) -> PipesConfig | None:
    """Parse one config file; None when the file holds no document."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")

    try:
        return PipesConfig.model_validate(_expand_env_vars(raw))
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e


def load_config(cli_path: str | None = None) -> PipesConfig:
    """Return the first non-empty config found, or the defaults."""
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        cfg = _read_config_file(path)
        if cfg is not None:
            return cfg
    return PipesConfig()


def _expand_env_vars(obj: object) -> object:
    """Substitute ${VAR} inside every string of a parsed YAML tree; unset vars become ""."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    if isinstance(obj, str):
        return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


# Default YAML template for `pipes config init`
DEFAULT_CONFIG_TEMPLATE = """\
# pipes.yaml

# Rewriting
rewrite:
  name_prefix: ""              # e.g. "utils." to call utils.uppercase(...)
  debug: false                 # record every rewritten block
  exclude:                     # paths containing any of these are left untouched
    - ".svelte-kit/"
    - "node_modules/"
    - "generated/"
    - "root.svelte"

# File discovery for `pipes transform` / `pipes scan` on directories
files:
  glob: "*.svelte"
  encoding: "utf-8"

# Logging
log_level: "info"              # debug | info | warn | error
"""
