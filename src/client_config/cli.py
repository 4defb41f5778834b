"""Command-line tool for validating and inspecting client configuration.

Examples:
  # Validate configuration
  msgclient-config --validate

  # Show the effective configuration (defaults + file + environment)
  msgclient-config --show

  # Use a custom config file and load variables from a .env file
  msgclient-config --config /path/to/client.yaml --env-file .env --validate

  # JSON output for automation
  msgclient-config --validate --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from client_config.config import ClientConfig
from client_config.loader import DEFAULT_CONFIG_FILE, load_config
from client_core.errors import ConfigurationError
from client_core.logging import setup_logging

logger = logging.getLogger(__name__)


def _build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msgclient-config",
        description="Messaging Client Configuration Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n", 2)[2],
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and report advisories",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the effective configuration as YAML",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to client.yaml file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Load environment variables from this .env file first",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format instead of human-readable",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _configure_cli_logging(verbose: bool) -> None:
    setup_logging(
        name="client_config",
        component="cli",
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stderr,
    )


def _build_validation_output(
    passed: bool, advisories: List[str], errors: List[str]
) -> Dict[str, Any]:
    return {
        "validation": {
            "passed": passed,
            "advisories": advisories,
            "errors": errors,
        }
    }


def _print_validation(advisories: List[str]) -> None:
    print("✓ Configuration validation passed")
    if advisories:
        print(f"  - Advisories: {len(advisories)}")
        for message in advisories:
            print(f"    ! {message}")
    else:
        print("  - Advisories: none")


def _print_config(config: ClientConfig) -> None:
    print("\nConfiguration:")
    print("=" * 80)
    print(yaml.safe_dump({"client": config.to_dict()}, default_flow_style=False, sort_keys=False))
    print("=" * 80)


def _handle_cli_error(error: Exception, as_json: bool, verbose: bool) -> int:
    if isinstance(error, FileNotFoundError):
        label, text = "Error", str(error)
    elif isinstance(error, ConfigurationError):
        label, text = "Validation error", str(error)
    else:
        label, text = "Unexpected error", f"Unexpected error: {error}"

    if as_json:
        payload: Dict[str, Any] = {"error": text}
        if isinstance(error, ConfigurationError):
            payload.update(_build_validation_output(False, [], [str(error)]))
        print(json.dumps(payload, indent=2))
    else:
        print(f"✗ {label}: {error}", file=sys.stderr)
        if verbose and label == "Unexpected error":
            import traceback

            traceback.print_exc()
    return 1


def _cli_main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for config validation and debugging."""
    parser = _build_cli_parser()
    args = parser.parse_args(argv)

    _configure_cli_logging(args.verbose)

    if not args.validate and not args.show:
        parser.print_help()
        return 0

    if args.env_file:
        if not load_dotenv(args.env_file):
            logger.warning(f"No variables loaded from env file: {args.env_file}")

    try:
        config = load_config(config_path=args.config, validate=False)

        output: Dict[str, Any] = {}

        if args.validate:
            advisories = config.validate()
            if args.json:
                output.update(_build_validation_output(True, advisories, []))
            else:
                _print_validation(advisories)

        if args.show:
            if args.json:
                output["config"] = config.to_dict()
            else:
                _print_config(config)

        if args.json:
            print(json.dumps(output, indent=2))

        return 0

    except Exception as e:
        return _handle_cli_error(e, args.json, args.verbose)


def main() -> None:
    sys.exit(_cli_main())


if __name__ == "__main__":
    main()
