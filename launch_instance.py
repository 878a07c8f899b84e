#!/usr/bin/env python3
"""
Launch an application instance and wait for it to reach the expected status.

The remote service client is supplied by the caller as an import path to a
factory that takes a ServiceConfig and returns an IServiceFacade.

Usage:
    python launch_instance.py --config launcher.yml --facade mycompany.express:create_facade
    python launch_instance.py --config launcher.yml --facade mycompany.express:create_facade \\
        --workspace /var/ci/workspace --variables-file build_vars.json
"""

import argparse
import importlib
import json
import signal
import sys
from pathlib import Path

from core.exceptions import ConfigurationError
from core.interfaces.service_facade_interface import IServiceFacade
from core.orchestration.instance_orchestrator import InstanceOrchestrator
from core.services.config_service import ConfigService
from core.services.variable_store import INSTANCE_ID_KEY, VariableStore
from core.utils.cancellation import CancellationToken
from core.utils.logger import setup_logger


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Launch an application instance")
    parser.add_argument(
        "--config",
        required=True,
        help="YAML configuration file with service and launch sections"
    )
    parser.add_argument(
        "--facade",
        required=True,
        help="Service facade factory as module:callable"
    )
    parser.add_argument(
        "--workspace",
        default=".",
        help="Workspace root that relative paths are resolved against"
    )
    parser.add_argument(
        "--variables-file",
        help="JSON file holding build variables shared between steps"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level, overrides the configuration file"
    )
    return parser.parse_args()


def load_facade(import_path: str, service_config) -> IServiceFacade:
    """Import ``module:callable`` and build the facade with it."""
    module_name, _, attribute = import_path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(f"Facade must be given as module:callable, got {import_path}")

    try:
        factory = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Unable to load facade factory {import_path}: {e}") from e
    return factory(service_config)


def load_variables(path: str) -> VariableStore:
    variables_path = Path(path)
    if not variables_path.exists():
        return VariableStore()
    return VariableStore(json.loads(variables_path.read_text(encoding="utf-8")))


def save_variables(path: str, store: VariableStore) -> None:
    Path(path).write_text(json.dumps(store.as_dict(), indent=2), encoding="utf-8")


def main() -> int:
    args = parse_arguments()

    try:
        config_service = ConfigService(args.config)
        service_config = config_service.get_service_config()
        launch_config = config_service.get_launch_config()
        service_facade = load_facade(args.facade, service_config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logger("core", level=args.log_level or service_config.log_level.value)
    setup_logger("infrastructure", level=args.log_level or service_config.log_level.value)
    logger = setup_logger(__name__)

    variable_store = load_variables(args.variables_file) if args.variables_file else VariableStore()

    cancellation = CancellationToken()
    signal.signal(signal.SIGTERM, lambda signum, frame: cancellation.cancel())

    orchestrator = InstanceOrchestrator(
        service_config,
        service_facade,
        variable_store=variable_store,
        workspace_root=args.workspace,
        cancellation=cancellation,
    )

    try:
        outcome = orchestrator.launch_and_await(launch_config)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 1
    finally:
        if args.variables_file:
            save_variables(args.variables_file, variable_store)

    logger.info(f"Instance id: {variable_store.get_variable(INSTANCE_ID_KEY)}")
    logger.info(f"Build result: {outcome.build_result}")
    return 0 if outcome.should_continue else 1


if __name__ == "__main__":
    sys.exit(main())
