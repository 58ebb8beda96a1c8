"""CLI entry point for typeprops.

Commands operate on Babel AST JSON (``@babel/parser`` output with the
``typescript`` plugin) and on TypeScript source files for the staleness
markers.

Usage:
    python -m typeprops transform widget.json -o widget.out.json
    python -m typeprops preview widget.json
    python -m typeprops stamp src/Widget.tsx
    python -m typeprops env
    python -m typeprops test --unit
"""

from __future__ import annotations

import argparse
import json
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from typeprops.component import transform_component_calls
from typeprops.config import (
    EnvVar,
    get_environment,
    is_production,
    list_environment_variables,
)
from typeprops.core import get_logger, setup_logging
from typeprops.defaults import find_static_property
from typeprops.keys import transform_type_keys
from typeprops.marker import stamp_file
from typeprops.patch import transform_module
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.schema import transform_type_schemas
from typeprops.syntax import (
    BaseNode,
    ClassDeclaration,
    dump_node,
    entity_name,
    generate,
    parse_node,
    walk,
)

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def _load_ast(path: Path) -> BaseNode:
    """Read and validate a Babel AST JSON file."""
    with path.open(encoding="utf-8") as f:
        return parse_node(json.load(f))


def _add_module_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("ast", type=Path, help="Babel AST JSON file (File or Program)")
    parser.add_argument(
        "--import",
        "-i",
        dest="imports",
        type=Path,
        action="append",
        default=[],
        help="AST JSON of a locally imported module whose types are visible (repeatable)",
    )


# =============================================================================
# Transform Command
# =============================================================================


def cmd_transform(argv: list[str]) -> int:
    """Patch component classes in an AST and write the result."""
    parser = argparse.ArgumentParser(
        prog="python -m typeprops transform",
        description="Add derived prop validators to component classes",
    )
    _add_module_arguments(parser)
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "--keys",
        action="store_true",
        help="Also replace transformTypeToKeys<T>() calls",
    )
    parser.add_argument(
        "--components",
        action="store_true",
        help="Also replace transformTypeToPropTypes<T>(component) calls",
    )
    parser.add_argument(
        "--schema",
        action="store_true",
        help="Also replace transformTypeToSchema<T>() calls",
    )
    parser.add_argument(
        "--production",
        action="store_true",
        default=None,
        help="Treat the build as production (default: TYPEPROPS_PRODUCTION)",
    )
    args = parser.parse_args(argv)

    try:
        module = _load_ast(args.ast)
        imports = [_load_ast(path) for path in args.imports]
        options = ConvertOptions.from_environment()

        report = transform_module(module, options, imports)
        for result in report:
            logger.debug(f"{result.class_name}: {result.status.value}")

        state = ConvertState.for_module(module, imports, options)
        production = is_production(args.production)
        if args.components:
            transform_component_calls(module, state)
        if args.keys:
            transform_type_keys(module, state, production)
        if args.schema:
            transform_type_schemas(module, state, production)

        result_text = json.dumps(dump_node(module), indent=2)
        if args.output:
            args.output.write_text(result_text, encoding="utf-8")
            logger.info(f"Wrote {args.output}")
        else:
            print(result_text)

        logger.info(f"Patched {len(report.patched)} of {len(report)} classes")
        return 0

    except ValidationError as e:
        logger.error(f"Invalid AST input: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Transform failed: {e}")
        return 1


# =============================================================================
# Preview Command
# =============================================================================


def cmd_preview(argv: list[str]) -> int:
    """Print the validator objects a transform would produce."""
    parser = argparse.ArgumentParser(
        prog="python -m typeprops preview",
        description="Show derived validators as JavaScript without writing",
    )
    _add_module_arguments(parser)
    args = parser.parse_args(argv)

    try:
        module = _load_ast(args.ast)
        imports = [_load_ast(path) for path in args.imports]
    except ValidationError as e:
        logger.error(f"Invalid AST input: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read AST: {e}")
        return 1

    options = ConvertOptions.from_environment()
    report = transform_module(module, options, imports)
    classes = [node for node in walk(module) if isinstance(node, ClassDeclaration)]

    for node, result in zip(classes, report):
        name = entity_name(node.id) or "<anonymous>"
        if not result.patched:
            print(f"// {name}: {result.status.value}")
            continue
        declared = find_static_property(node, options.validator_property)
        print(f"// {name}")
        print(f"{name}.{options.validator_property} = {generate(declared.value)};")
    return 0


# =============================================================================
# Stamp Command
# =============================================================================


def cmd_stamp(argv: list[str]) -> int:
    """Refresh staleness markers in source files."""
    parser = argparse.ArgumentParser(
        prog="python -m typeprops stamp",
        description="Write update markers above transform helper calls",
    )
    parser.add_argument("files", type=Path, nargs="+", help="Source files to stamp")
    parser.add_argument(
        "--timestamp",
        "-t",
        type=int,
        default=None,
        help="Marker value in epoch milliseconds (default: now)",
    )
    args = parser.parse_args(argv)

    status = 0
    for path in args.files:
        try:
            if stamp_file(path, args.timestamp):
                logger.info(f"Stamped {path}")
        except OSError as e:
            logger.error(f"Could not stamp {path}: {e}")
            status = 1
    return status


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(argv: list[str]) -> int:
    """List configuration variables and their current values."""
    parser = argparse.ArgumentParser(
        prog="python -m typeprops env",
        description="Show typeprops configuration",
    )
    parser.add_argument(
        "--category",
        "-c",
        choices=["transform", "build", "logging"],
        default=None,
        help="Only show one category",
    )
    args = parser.parse_args(argv)

    for var in list_environment_variables(args.category):
        config = var.value
        source = "env" if config.name in os.environ else "default"
        print(f"{config.name}={get_environment(var)!r}  [{source}] {config.description}")
    return 0


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python -m typeprops test                # Run all tests
        python -m typeprops test --unit         # Run only unit tests
        python -m typeprops test --integration  # Run end-to-end AST fixture tests
        python -m typeprops test -k "merge"     # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []
    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    print("Usage: python -m typeprops <command> [args]")
    print("\nCommands:")
    print("  transform AST_JSON [-i JSON] [-o PATH] [--keys]  Patch classes in an AST")
    print("            [--components] [--schema]              and helper call sites")
    print("  preview AST_JSON [-i JSON]                       Print derived validators")
    print("  stamp FILE... [-t MS]                            Refresh update markers")
    print("  env                                              Show configuration")
    print("  test [--unit|--integration|--all]                Run the test suite")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return 1

    command, rest_args = argv[0], argv[1:]
    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "transform": cmd_transform,
        "preview": cmd_preview,
        "stamp": cmd_stamp,
        "env": cmd_env,
        "test": cmd_test,
    }

    if command in commands:
        setup_logging(get_environment(EnvVar.TYPEPROPS_LOG_LEVEL))
        return commands[command](rest_args)

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
