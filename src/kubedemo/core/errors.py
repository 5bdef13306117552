"""
errors.py
- Typed failures raised at every I/O boundary.
- The top-level flow catches DemoError and aborts; nothing here is retried.
"""

from typing import Optional


class DemoError(Exception):
    """Base class for every fatal condition in kubedemo."""


class ConfigError(DemoError):
    """Resource definition file or spec values are invalid."""


class ConnectionResolutionError(DemoError):
    """Credentials or the API server address could not be resolved."""


class ObserverFailure(DemoError):
    """The background observer stopped because a fetch failed."""


class ApiCallError(DemoError):
    """The API server rejected (or never answered) a create/get/delete call."""

    def __init__(self, operation: str, kind: str, namespace: str, name: str,
                 status: Optional[int] = None, reason: Optional[str] = None):
        self.operation = operation
        self.kind = kind
        self.namespace = namespace
        self.name = name
        self.status = status
        self.reason = reason
        detail = f"status={status}" if status is not None else "no response"
        if reason:
            detail += f", reason={reason}"
        super().__init__(f"{operation} {kind} {namespace}/{name} failed ({detail})")

    @property
    def is_conflict(self) -> bool:
        return self.status == 409

    @property
    def is_not_found(self) -> bool:
        return self.status == 404
