"""CLI entrypoint for the observability addon tooling."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from observability_addon import __version__
from observability_addon.config import Settings, get_settings
from observability_addon.health import FeedbackCollector, default_registry, evaluate
from observability_addon.kube import load_api_client
from observability_addon.report import print_values, print_verdict
from observability_addon.values import IntentsLoader, build_values


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Health-check and compose values for the multicluster observability addon.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to hub kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("probes", help="Print the feedback probe configuration for spokes")
    health = sub.add_parser("health", help="Evaluate the addon's health on a managed cluster")
    health.add_argument("cluster", help="Managed cluster name")
    values = sub.add_parser("values", help="Compose the logging values for a managed cluster")
    values.add_argument("cluster", help="Managed cluster name")
    return parser.parse_args(argv)


def _run_health(cluster: str, settings: Settings, console: Console) -> int:
    registry = default_registry(settings)
    api = load_api_client(str(settings.kubeconfig) if settings.kubeconfig else None, settings.context)
    fields = FeedbackCollector(api, registry, settings.addon_name).collect(cluster)
    verdict = evaluate(fields, registry)
    print_verdict(cluster, verdict, console)
    return 0 if verdict.healthy else 1


def _run_values(cluster: str, settings: Settings, console: Console) -> int:
    api = load_api_client(str(settings.kubeconfig) if settings.kubeconfig else None, settings.context)
    options, fragments = IntentsLoader(api, settings).load(cluster)
    values = build_values(options, fragments)
    print_values(cluster, options, values, console)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for observability-addon CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("observability_addon")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    console = Console()
    try:
        settings = get_settings()
        if args.kubeconfig:
            settings.kubeconfig = args.kubeconfig
        if args.context:
            settings.context = args.context

        if args.command == "probes":
            console.print_json(json.dumps(default_registry(settings).probe_fields()))
            return 0
        if args.command == "health":
            return _run_health(args.cluster, settings, console)
        return _run_values(args.cluster, settings, console)
    except Exception as e:
        logging.exception("Command failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
