"""Locates, reads and validates assetwarden.yaml."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import WardenConfig

PROJECT_CONFIG = Path("assetwarden.yaml")

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _search_paths(cli_path: str | None) -> list[Path]:
    """An explicit --config file is the only candidate; otherwise project then user."""
    if cli_path:
        return [Path(cli_path)]
    return [PROJECT_CONFIG, Path.home() / ".assetwarden" / "config.yaml"]


def load_config(cli_path: str | None = None) -> WardenConfig:
    """Return the first config found, or the defaults when none exists.

    Every problem is raised as ValueError naming the offending file.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in _search_paths(cli_path):
        if path.is_file():
            return _read_config(path)
    return WardenConfig()


def _read_config(path: Path) -> WardenConfig:
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: not valid YAML: {e}") from e
    except OSError as e:
        raise ValueError(f"{path}: cannot be read: {e}") from e

    if raw is None:
        return WardenConfig()
    if not isinstance(raw, dict):
        raise ValueError(
            f"{path}: top level must be a mapping, got {type(raw).__name__}"
        )

    try:
        return WardenConfig.model_validate(_expand_env_vars(raw, path))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValueError(f"{path}: invalid settings: {problems}") from e


def _expand_env_vars(obj: object, source: Path | str = "config") -> object:
    """Recursively expand ${VAR} and ${VAR:-fallback} references in strings.

    A variable that is unset and has no fallback raises ValueError.
    """
    if isinstance(obj, str):

        def _sub(m: re.Match) -> str:
            name, fallback = m.group(1), m.group(2)
            value = os.environ.get(name, fallback)
            if value is None:
                raise ValueError(f"{source}: environment variable {name} is not set")
            return value

        return _ENV_REF.sub(_sub, obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v, source) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v, source) for v in obj]
    return obj

# Default YAML template for `assetwarden config init`
DEFAULT_CONFIG_TEMPLATE = """\
# assetwarden.yaml

# Asset bundle layout
assets:
  metadata_file: "package.json"   # JSON file holding the bundle's "version"
  record_file: ".integrity.yml"   # integrity record kept beside the default assets
  assets_dir: "lib/lambda"        # default assets, relative to the tool checkout
  # default_assets: "/path/to/tool/lib/lambda"
  baseline_version: "0.0.0"       # version assumed when metadata has none

# Files that count toward the content fingerprint
fingerprint:
  include: ["*.js", "package.json"]
  exclude: [".serverless", "node_modules"]

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
