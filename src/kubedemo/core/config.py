"""
config.py
- Defines runtime flags derived from environment variables.
- Configures loguru once for the whole process.
- Builds the Settings object that is passed explicitly to every component.
"""

import math
import os
import sys
from dataclasses import dataclass, replace
from typing import Optional

from loguru import logger

from kubedemo.core import constants
from kubedemo.core.config_loader import load_yaml, preview_yaml
from kubedemo.core.errors import ConfigError

# --- Runtime Behavior Flags ---
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
DRY_RUN = os.getenv("DRY_RUN", "false").lower() == "true"

# --- Scope & Polling ---
NAMESPACE = os.getenv("KUBEDEMO_NAMESPACE", constants.DEFAULT_NAMESPACE)
POLL_INTERVAL = os.getenv("KUBEDEMO_POLL_INTERVAL", str(constants.DEFAULT_POLL_INTERVAL))

# --- Config Paths ---
RESOURCE_FILE = os.getenv("KUBEDEMO_FILE", "/etc/kubedemo/resources.yml")
KUBECONFIG = os.getenv("KUBECONFIG")

# --- Error Reporting ---
SENTRY_DSN = os.getenv("SENTRY_DSN")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(debug=DEBUG):
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        colorize=True,
        format=LOG_FORMAT,
    )


@dataclass(frozen=True)
class Settings:
    outside_cluster: bool = False
    kubeconfig: Optional[str] = None
    namespace: str = constants.DEFAULT_NAMESPACE
    poll_interval: float = constants.DEFAULT_POLL_INTERVAL
    dry_run: bool = False

    label_key: str = constants.DEFAULT_LABEL_KEY
    label_value: str = constants.DEFAULT_LABEL_VALUE

    workload_name: str = constants.DEFAULT_WORKLOAD_NAME
    image: str = constants.DEFAULT_IMAGE
    replicas: int = constants.DEFAULT_REPLICAS
    container_port: int = constants.DEFAULT_CONTAINER_PORT

    service_name: str = constants.DEFAULT_SERVICE_NAME
    service_port: int = constants.DEFAULT_SERVICE_PORT
    target_port: int = constants.DEFAULT_TARGET_PORT
    node_port: Optional[int] = constants.DEFAULT_NODE_PORT
    routing_mode: str = "NodeExposed"


# Maps resource file sections onto Settings fields.
_FILE_FIELDS = {
    "binding": {"key": ("label_key", str), "value": ("label_value", str)},
    "workload": {
        "name": ("workload_name", str),
        "image": ("image", str),
        "replicas": ("replicas", int),
        "container_port": ("container_port", int),
    },
    "service": {
        "name": ("service_name", str),
        "port": ("service_port", int),
        "target_port": ("target_port", int),
        "node_port": ("node_port", int),
        "routing_mode": ("routing_mode", str),
    },
}


def _coerce(value, cast, where):
    if value is None:
        return None
    # int() would turn true into 1 and truncate 80.9 to 80.
    if cast is int and isinstance(value, (bool, float)):
        raise ConfigError(f"Invalid value for {where}: {value!r} is not an integer")
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {where}: {value!r}") from e


def settings_from_file(data):
    """Translate a parsed resource file into Settings keyword overrides."""
    overrides = {}
    if "namespace" in data:
        overrides["namespace"] = _coerce(data["namespace"], str, "namespace")

    for section in ("binding", "workload", "service"):
        block = data.get(section) or {}
        if not isinstance(block, dict):
            raise ConfigError(f"Section '{section}' must be a mapping")
        for key, value in block.items():
            if key not in _FILE_FIELDS[section]:
                raise ConfigError(f"Unknown key '{section}.{key}'")
            field_name, cast = _FILE_FIELDS[section][key]
            overrides[field_name] = _coerce(value, cast, f"{section}.{key}")
    return overrides


def load_settings(outside_cluster=False, kubeconfig=None, namespace=None,
                  config_path=None, dry_run=None, interval=None):
    """
    Resolve Settings with precedence: CLI arguments > resource file > environment > defaults.
    """
    try:
        poll_interval = float(POLL_INTERVAL)
    except ValueError as e:
        raise ConfigError(f"KUBEDEMO_POLL_INTERVAL must be a number, got {POLL_INTERVAL!r}") from e

    settings = Settings(
        outside_cluster=outside_cluster,
        kubeconfig=kubeconfig or KUBECONFIG,
        namespace=NAMESPACE,
        poll_interval=poll_interval,
        dry_run=DRY_RUN if dry_run is None else dry_run,
    )

    path = config_path or RESOURCE_FILE
    preview_yaml(path, name="resource definitions")
    settings = replace(settings, **settings_from_file(load_yaml(path)))

    if namespace:
        settings = replace(settings, namespace=namespace)
    if interval is not None:
        settings = replace(settings, poll_interval=interval)

    if not math.isfinite(settings.poll_interval) or settings.poll_interval <= 0:
        raise ConfigError(f"Poll interval must be a positive finite number, got {settings.poll_interval}")
    return settings
