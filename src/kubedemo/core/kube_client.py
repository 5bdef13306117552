"""
kube_client.py
- Resolves credentials for the Kubernetes API and builds the process-wide ClientHandle.
- Two modes:
    - outside cluster: kubeconfig file (explicit path, $KUBECONFIG, or ~/.kube/config)
    - in cluster: service account token + CA mounted by the orchestrator
- Never retries; every failure raises ConnectionResolutionError.
"""

import os
from pathlib import Path

import yaml
from kubernetes import client as k8s_client
from kubernetes import config as k8s_config
from kubernetes.config.config_exception import ConfigException
from loguru import logger

from kubedemo.core.constants import KUBECONFIG_RELATIVE_PATH
from kubedemo.core.errors import ConnectionResolutionError


class ClientHandle:
    """Authenticated connection to one API server, shared read-only by all components."""

    def __init__(self, api_client, host=None):
        self.api_client = api_client
        self.host = host
        self.apps = k8s_client.AppsV1Api(api_client)
        self.core = k8s_client.CoreV1Api(api_client)

    def close(self):
        self.api_client.close()

    def __repr__(self):
        return f"ClientHandle(host={self.host!r})"


def default_kubeconfig_path():
    """Return ~/.kube/config, failing if the home directory cannot be resolved."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConnectionResolutionError(f"Could not resolve home directory: {e}") from e
    return str(home / KUBECONFIG_RELATIVE_PATH)


def _load_outside_cluster(configuration, kubeconfig=None):
    path = kubeconfig or default_kubeconfig_path()
    # $KUBECONFIG may list several files; the client merges whichever exist.
    if not any(os.path.isfile(p) for p in path.split(os.pathsep) if p):
        raise ConnectionResolutionError(f"Kubeconfig not found at {path}")

    logger.debug(f"[connect] Loading kubeconfig from {path}")
    try:
        k8s_config.load_kube_config(config_file=path, client_configuration=configuration)
    except (ConfigException, yaml.YAMLError, OSError, ValueError) as e:
        raise ConnectionResolutionError(f"Invalid kubeconfig {path}: {e}") from e


def _load_in_cluster(configuration):
    logger.debug("[connect] Loading in-cluster service account credentials")
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
    except ConfigException as e:
        raise ConnectionResolutionError(f"In-cluster credentials unavailable: {e}") from e


def connect(outside_cluster, kubeconfig=None):
    """
    Build a ClientHandle for the selected mode.

    Args:
        outside_cluster (bool): True to read a kubeconfig file, False for in-cluster credentials.
        kubeconfig (str): Optional kubeconfig path, only used when outside_cluster is True.

    Returns:
        ClientHandle: Handle bound to a private Configuration (the library's global default is untouched).
    """
    configuration = k8s_client.Configuration()
    if outside_cluster:
        _load_outside_cluster(configuration, kubeconfig)
    else:
        _load_in_cluster(configuration)

    handle = ClientHandle(k8s_client.ApiClient(configuration), host=configuration.host)
    mode = "outside-cluster" if outside_cluster else "in-cluster"
    logger.info(f"[connect] Connected to {configuration.host} ({mode})")
    return handle
