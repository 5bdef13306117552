#!/usr/bin/env python3
"""
entrypoint.py
- Command-line entrypoint for kubedemo.
- Usage:
    kubedemo                       # in-cluster service account
    kubedemo --outside-cluster     # ~/.kube/config (or --kubeconfig / $KUBECONFIG)
    kubedemo --dry-run             # print manifests, no API calls
"""

import argparse
import sys

from kubedemo.core.config import DEBUG, load_settings, setup_logging
from kubedemo.core.errors import DemoError
from kubedemo.main import fatal, init_error_reporting, run


def build_parser():
    parser = argparse.ArgumentParser(
        prog="kubedemo",
        description="Create a Deployment and NodePort Service, watch the Deployment, delete both on SIGINT/SIGTERM.",
    )
    parser.add_argument("--outside-cluster", action="store_true", default=False,
                        help="set when running outside the cluster (uses kubeconfig)")
    parser.add_argument("--kubeconfig", help="kubeconfig path (default: $KUBECONFIG or ~/.kube/config)")
    parser.add_argument("--namespace", help="namespace for both resources (default: default)")
    parser.add_argument("--config", dest="config_path", help="YAML resource definition overrides")
    parser.add_argument("--interval", type=float, help="seconds between Deployment reads (default: 1)")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="print the manifests as YAML and exit")
    parser.add_argument("--debug", action="store_true", default=DEBUG, help="enable DEBUG logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)
    init_error_reporting()

    try:
        settings = load_settings(
            outside_cluster=args.outside_cluster,
            kubeconfig=args.kubeconfig,
            namespace=args.namespace,
            config_path=args.config_path,
            dry_run=args.dry_run,
            interval=args.interval,
        )
        return run(settings)
    except DemoError as e:
        return fatal(e)


if __name__ == "__main__":
    sys.exit(main())
