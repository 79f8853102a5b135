"""Main CLI entry point for the nodetree-xml command-line tool.

Provides commands to dump parsed trees, validate documents and query
properties by node path.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from nodetree_xml import __version__
from nodetree_xml.api import XMLParser
from nodetree_xml.shared.config import ConfigError, ParserConfig
from nodetree_xml.shared.errors import XMLParserError
from nodetree_xml.shared.logging import PACKAGE_LOGGER, configure_logging, get_logger

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def load_config(config_path: Optional[Path], lenient: bool = False) -> ParserConfig:
    """Build the parser configuration for a CLI run.

    Raises:
        ConfigError: If the configuration file is unreadable or invalid
    """
    config = ParserConfig()
    if config_path is not None:
        try:
            config = ParserConfig.from_json(config_path.read_text())
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e
    if lenient:
        config = config.override(tree__strict_unterminated=False)
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="nodetree-xml",
        description="Parse XML-style configuration files into node trees"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output, including the source and resulting tree"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", "-c",
        type=Path,
        help="Parser configuration file (JSON)"
    )
    common.add_argument(
        "--lenient",
        action="store_true",
        help="Accept elements left open at end of input"
    )
    common.add_argument(
        "--encoding",
        help="Source file encoding (default: from configuration)"
    )

    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="Parse files and print their trees"
    )
    parse_parser.add_argument("paths", nargs="+", type=Path, help="Files to parse")
    parse_parser.add_argument(
        "--format", "-f",
        choices=["tree", "describe", "json"],
        default="tree",
        help="Output format (default: tree)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Check that files parse"
    )
    validate_parser.add_argument(
        "paths", nargs="+", type=Path, help="Files to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format"
    )

    query_parser = subparsers.add_parser(
        "query", parents=[common], help="Print nodes found at a path"
    )
    query_parser.add_argument("path", type=Path, help="File to parse")
    query_parser.add_argument(
        "select",
        help="Slash-separated node types below the root, e.g. Config/Entry"
    )
    query_parser.add_argument(
        "--property", "-p",
        dest="property_name",
        help="Print only this property's value for each node"
    )

    return parser


def _parse_one(parser: XMLParser, path: Path, encoding: Optional[str]) -> Dict[str, Any]:
    try:
        result = parser.parse_file(path, encoding)
    except XMLParserError as e:
        return {
            "file": str(path),
            "success": False,
            "error_type": type(e).__name__,
            "error": str(e),
        }
    return {
        "file": str(path),
        "success": True,
        "result": result,
    }


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    parser = XMLParser(config)
    chunks: List[str] = []
    records: List[Dict[str, Any]] = []
    failures = 0

    for path in args.paths:
        outcome = _parse_one(parser, path, args.encoding)
        if not outcome["success"]:
            failures += 1
            print(f"{path}: {outcome['error']}", file=sys.stderr)
            continue

        root = outcome["result"].root
        if args.format == "json":
            records.append({
                "file": str(path),
                "summary": outcome["result"].summary(),
                "tree": root.to_dict(),
            })
        elif args.format == "describe":
            chunks.append("\n".join([f"# {path}"] + root.describe_lines()))
        else:
            chunks.append("\n".join([f"# {path}"] + parser.dump_tree(root)))

    if args.format == "json":
        formatted_output = json.dumps(records, indent=2)
    else:
        formatted_output = "\n\n".join(chunks)

    if args.output:
        try:
            args.output.write_text(formatted_output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_INVALID
    elif formatted_output:
        print(formatted_output)

    return EXIT_OK if failures == 0 else EXIT_INVALID


def cmd_validate(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle validate command."""
    parser = XMLParser(config)
    results = []

    for path in args.paths:
        outcome = _parse_one(parser, path, args.encoding)
        entry: Dict[str, Any] = {"file": str(path), "valid": outcome["success"]}
        if outcome["success"]:
            entry["nodes"] = outcome["result"].metrics.nodes_created
        else:
            entry["error_type"] = outcome["error_type"]
            entry["error"] = outcome["error"]
        results.append(entry)

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for entry in results:
            status = "OK  " if entry["valid"] else "FAIL"
            print(f"{status} {entry['file']}")
            if not entry["valid"]:
                print(f"     {entry['error_type']}: {entry['error']}")

    return EXIT_OK if all(r["valid"] for r in results) else EXIT_INVALID


def cmd_query(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle query command."""
    parser = XMLParser(config)
    try:
        result = parser.parse_file(args.path, args.encoding)
    except XMLParserError as e:
        print(f"{args.path}: {e}", file=sys.stderr)
        return EXIT_INVALID

    nodes = result.root.select(args.select)
    if not nodes:
        print(f"No nodes found at {args.select}", file=sys.stderr)
        return EXIT_INVALID

    for node in nodes:
        if args.property_name is None:
            print(node.opening_tag())
            continue
        value = node.get_property_value(args.property_name)
        if value is None:
            print(
                f"{node.get_path()}: no property {args.property_name}",
                file=sys.stderr,
            )
            return EXIT_INVALID
        print(value)

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    try:
        config = load_config(args.config, args.lenient)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        config = config.override(global___verbose=True)
        level = "INFO"
    elif args.quiet:
        level = "ERROR"
    else:
        level = config.global_.logging_level
    log_handler = configure_logging(level)

    logger.debug("Running command", extra={"command": args.command})

    handlers = {
        "parse": cmd_parse,
        "validate": cmd_validate,
        "query": cmd_query,
    }
    try:
        return handlers[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130
    finally:
        logging.getLogger(PACKAGE_LOGGER).removeHandler(log_handler)


if __name__ == "__main__":
    sys.exit(main())
