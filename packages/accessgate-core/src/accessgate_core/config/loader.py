"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import AccessGateConfig

# Only these variables may be substituted into config values.
_ALLOWED_ENV_VARS = frozenset({
    "ACCESSGATE_TOKEN",
    "ACCESSGATE_KESSEL_URL",
    "ACCESSGATE_RBAC_URL",
    "ACCESSGATE_ROUTES",
})


def load_config(cli_path: str | None = None) -> AccessGateConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./accessgate.yaml"),
        Path.home() / ".accessgate" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return AccessGateConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return AccessGateConfig()


def _replace_env_var(match: re.Match) -> str:
    name = match.group(1)
    if name not in _ALLOWED_ENV_VARS:
        raise ValueError(f"Environment variable {name} is not in allowlist")
    value = os.environ.get(name)
    if value is None:
        raise ValueError(f"Environment variable {name} is not set")
    return value


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings.

    Raises ValueError for variables outside the allowlist or unset ones.
    """
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", _replace_env_var, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for a new accessgate.yaml
DEFAULT_CONFIG_TEMPLATE = """\
# accessgate.yaml

# Access-check service (relation checks over batches of resources)
kessel:
  base_url: "${ACCESSGATE_KESSEL_URL}"
  check_path: "/api/access/v1/check"
  token_env: "ACCESSGATE_TOKEN"
  timeout: 10

# Identity service (granted permission strings)
identity:
  base_url: "${ACCESSGATE_RBAC_URL}"
  access_path: "/api/rbac/v1/access/"
  application: "rbac"            # comma-separated list is allowed
  page_limit: 1000
  token_env: "ACCESSGATE_TOKEN"
  timeout: 10

# Granted permission cache window
cache:
  ttl_seconds: 300

# Route permission definitions
routes:
  definitions_path: null         # e.g. "routes.yaml"

# Relations resolved per resource
relations: [view, edit, delete, create, move, rename]

# Provider plugins (entry point names)
# plugins:
#   access_check: "kessel"
#   identity: "rbac"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
