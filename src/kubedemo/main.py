#!/usr/bin/env python3
"""
main.py
- Sequential flow for the demo:
    1. resolve credentials (in-cluster or kubeconfig)
    2. declare the Deployment, then the Service
    3. start the observer loop
    4. wait for SIGINT/SIGTERM, then delete the Deployment, then the Service
- Every failure is fatal. fatal() is the single place that decides to abort.
"""

import sys

import sentry_sdk
from loguru import logger

from kubedemo.core.config import SENTRY_DSN
from kubedemo.core.errors import DemoError
from kubedemo.core.kube_client import connect
from kubedemo.lib.render import render_manifests
from kubedemo.lib.resources import declare_service, declare_workload
from kubedemo.lib.specs import specs_from_settings
from kubedemo.runner.lifecycle import LifecycleController
from kubedemo.runner.observer import WorkloadObserver

EXIT_OK = 0
EXIT_FATAL = 1


def init_error_reporting(dsn=SENTRY_DSN):
    if dsn:
        sentry_sdk.init(dsn=dsn, traces_sample_rate=1.0)


def fatal(error, leftovers=()):
    """Report error, list any resources left behind, and return the abort exit code."""
    logger.error(f"💥 {error}")
    for ref in leftovers:
        logger.warning(f"[main] {ref.kind} {ref} was not cleaned up.")
    if SENTRY_DSN:
        sentry_sdk.capture_exception(error)
    return EXIT_FATAL


def run(settings, controller=None, connector=connect):
    """
    Execute the full create -> observe -> drain sequence.

    Returns:
        int: EXIT_OK after a clean drain, EXIT_FATAL otherwise.
    """
    workload_spec, service_spec = specs_from_settings(settings)

    if settings.dry_run:
        sys.stdout.write(render_manifests(workload_spec, service_spec))
        return EXIT_OK

    # Handlers go in first so a signal during the creates is held until both complete.
    controller = controller or LifecycleController()
    controller.install_signal_handlers()

    created = []
    handle = None
    try:
        handle = connector(settings.outside_cluster, settings.kubeconfig)

        workload_ref = declare_workload(handle, workload_spec)
        created.append(workload_ref)
        service_ref = declare_service(handle, service_spec)
        created.append(service_ref)

        controller.watch(WorkloadObserver(handle, workload_ref, interval=settings.poll_interval))
        controller.wait()
        controller.drain(handle, workload_ref, service_ref)
    except DemoError as e:
        return fatal(e, [ref for ref in created if ref not in controller.deleted])
    finally:
        if handle is not None:
            handle.close()

    return EXIT_OK
