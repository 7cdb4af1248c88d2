"""Command line entry point.

Renders plugin pages against a live cluster and prints them as JSON, which
is handy for checking what the dashboard would show.
"""

import argparse
import json
import logging
import sys
from typing import Any

from knative_dashboard import __version__
from knative_dashboard.config import KnativeDashboardConfig, LogLevel
from knative_dashboard.models.requests import ContentRequest


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the command line."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="knative-dashboard",
        description="Render Knative Serving dashboard pages from a cluster",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Cluster options
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use",
    )
    parser.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Namespace to render (default: from config or 'default')",
    )
    parser.add_argument(
        "--root-path",
        default=None,
        help="Prefix for generated content paths",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Refuse actions that would mutate the cluster",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    content = subparsers.add_parser("content", help="Render a content path")
    content.add_argument("path", nargs="?", default="", help="Content path (default: overview)")

    subparsers.add_parser("navigation", help="Print the navigation tree")
    subparsers.add_parser("health", help="Check that the Knative Serving CRDs are readable")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> KnativeDashboardConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig

    if args.context:
        config_kwargs["kubeconfig_context"] = args.context

    if args.namespace:
        config_kwargs["default_namespace"] = args.namespace

    if args.root_path is not None:
        config_kwargs["root_path"] = args.root_path

    if args.read_only:
        config_kwargs["read_only_mode"] = True

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return KnativeDashboardConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"knative-dashboard v{__version__}")

    from knative_dashboard.clients.kubernetes import K8sDashboardClient
    from knative_dashboard.domains.serving.plugin import create_plugin
    from knative_dashboard.plugin_manager import PluginManager

    exit_code = 0
    dashboard = K8sDashboardClient(config)
    dashboard.connect()
    try:
        manager = PluginManager()
        name = manager.register_plugin(create_plugin(dashboard, config))

        if args.command == "content":
            response = manager.handle_content(name, ContentRequest(content_path=args.path))
            output: Any = response.to_dict()
        elif args.command == "navigation":
            output = [nav.to_dict() for nav in manager.navigation()]
        else:
            results = manager.run_health_checks(dashboard)
            output = {plugin: {"healthy": ok, "message": msg} for plugin, (ok, msg) in results.items()}
            if not all(ok for ok, _ in results.values()):
                exit_code = 1
    finally:
        dashboard.disconnect()

    print(json.dumps(output, indent=2))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
