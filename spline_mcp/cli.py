"""
Launcher for the Spline servers.

Runs one of the servers in a child interpreter:

    spline-mcp --mode mcp --transport stdio
    spline-mcp --mode mcp --transport http --port 3000
    spline-mcp --mode webhook --port 3000
    spline-mcp --mode minimal
"""

from __future__ import annotations

import argparse
import importlib.util
import logging
import os
import subprocess
import sys

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
)
logger = logging.getLogger('spline-mcp')

MODULES = {
    'mcp': 'spline_mcp.server',
    'webhook': 'spline_webhooks.server',
    'minimal': 'spline_mcp.minimal',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spline-mcp',
        description="Start a Spline server (MCP, webhook demo or minimal diagnostic)",
    )
    parser.add_argument(
        "--mode", "-m", default="mcp",
        help="Server mode to run: mcp, webhook or minimal (default: mcp)",
    )
    parser.add_argument(
        "--transport", "-t", choices=["stdio", "http"], default="stdio",
        help="Transport type for MCP mode (default: stdio)",
    )
    parser.add_argument(
        "--port", "-p", type=int, default=3000,
        help="Port for HTTP transport or webhook server (default: 3000)",
    )
    parser.add_argument(
        "--config", "-c", default=None,
        help="Path to a .env file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Run with verbose logging",
    )
    return parser


def build_command(args: argparse.Namespace) -> tuple[list[str], dict[str, str]]:
    """
    Translate launcher options into the child command line and environment.

    Raises:
        ValueError: If the mode is unknown
    """
    module = MODULES.get(args.mode)
    if module is None:
        raise ValueError(f"Unknown mode: {args.mode}")

    command = [sys.executable, "-m", module]
    env = dict(os.environ)

    if args.mode == 'mcp':
        command += ["--transport", args.transport, "--port", str(args.port)]
        if args.config:
            command += ["--config", args.config]
        if args.verbose:
            command.append("--verbose")
    elif args.mode == 'webhook':
        env['PORT'] = str(args.port)

    return command, env


def module_available(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except ModuleNotFoundError:
        return False


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        command, env = build_command(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    module = command[2]
    if not module_available(module):
        logger.error(f"Module not found: {module}")
        return 1

    logger.info(f"Starting Spline server in {args.mode} mode")
    if args.mode == 'mcp':
        logger.info(f"Transport: {args.transport}")
    logger.info(f"Port: {args.port}")
    logger.debug(f"Command: {' '.join(command)}")

    try:
        completed = subprocess.run(command, env=env)
    except OSError as e:
        logger.error(f"Error executing command: {e}")
        return 1
    except KeyboardInterrupt:
        return 130

    return completed.returncode


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
