"""
render.py
- Serializes the manifests that would be submitted, for --dry-run and debugging.
"""

import yaml
from kubernetes import client as k8s_client

from kubedemo.lib.specs import build_deployment, build_service


def render_manifests(workload, service):
    """Return both manifests as a two-document YAML stream, Deployment first."""
    api = k8s_client.ApiClient()
    try:
        documents = [
            api.sanitize_for_serialization(build_deployment(workload)),
            api.sanitize_for_serialization(build_service(service)),
        ]
    finally:
        api.close()
    return yaml.safe_dump_all(documents, sort_keys=False)
