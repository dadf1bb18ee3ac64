"""
Showrunner Main Entry Point

Command-line access to the screenplay, registry and decode operations.
Results are printed to stdout as JSON; logs go to stderr.

Usage:
    python -m showrunner parse episode.txt
    python -m showrunner registry episode.txt --bible bible.json --breakdown breakdown.json
    python -m showrunner decode response.txt
    python -m showrunner serve --port 8000
"""

import sys
import json
import argparse
from pathlib import Path

from showrunner.core.logging_config import setup_logging, get_logger, LogLevel
from showrunner.core.config import load_config
from showrunner.core.exceptions import ShowrunnerError
from showrunner.utils.file_utils import read_json, read_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="showrunner",
        description="Showrunner - Screenplay structuring and casting preparation"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Assemble a screenplay into a paginated document")
    parse_cmd.add_argument("script", type=str, help="Path to screenplay text")
    parse_cmd.add_argument("--title", type=str, help="Episode title")
    parse_cmd.add_argument("--episode", type=int, help="Episode number")
    parse_cmd.add_argument("--scenes", action="store_true", help="Print scene spans instead of pages")

    registry_cmd = subparsers.add_parser("registry", help="Build the canonical character registry")
    registry_cmd.add_argument("script", type=str, help="Path to screenplay text")
    registry_cmd.add_argument("--bible", type=str, help="Story bible characters (JSON list or {characters: [...]})")
    registry_cmd.add_argument("--breakdown", type=str, help="Scene breakdown (JSON list or {scenes: [...]})")
    registry_cmd.add_argument("--batch-size", type=int, help="Characters per generation batch")

    decode_cmd = subparsers.add_parser("decode", help="Decode a batched casting response")
    decode_cmd.add_argument("response", type=str, help="Path to raw response text")

    serve_cmd = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_cmd.add_argument("--host", type=str, help="Bind address")
    serve_cmd.add_argument("--port", type=int, help="Port for the API server")
    serve_cmd.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def _load_list(path: str, key: str) -> list:
    """Read a JSON list, or the list stored under key in a JSON object."""
    data = read_json(path)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ShowrunnerError(f"Expected a JSON list in {path}", {"key": key})
    return data


def run_parse(args, config) -> dict:
    from showrunner.screenplay import ScreenplayAssembler, split_scenes

    document = ScreenplayAssembler(config.screenplay).assemble(
        read_text(args.script), title=args.title, episode_number=args.episode
    )
    if args.scenes:
        return {"scenes": [span.to_dict() for span in split_scenes(document)]}
    return document.to_dict()


def run_registry(args, config) -> dict:
    from showrunner.screenplay import ScreenplayAssembler
    from showrunner.characters import CharacterRegistryBuilder, extract_mentions, partition, registry_summary

    document = ScreenplayAssembler(config.screenplay).assemble(read_text(args.script))
    bible = _load_list(args.bible, "characters") if args.bible else []
    breakdown = _load_list(args.breakdown, "scenes") if args.breakdown else []

    registry = CharacterRegistryBuilder(config.resolution).build(bible, extract_mentions(document), breakdown)
    batches = partition(registry, args.batch_size or config.casting.batch_size)
    return {
        "characters": [identity.to_dict() for identity in registry],
        "summary": registry_summary(registry),
        "batches": [[identity.name for identity in batch] for batch in batches],
    }


def run_decode(args, config) -> dict:
    from showrunner.llm import ResilientResponseDecoder

    decoder = ResilientResponseDecoder(config.casting.identity_field, config.casting.array_key)
    return decoder.decode_with_report(read_text(args.response)).to_dict()


def run_serve(args, config) -> None:
    from showrunner.api import start_server

    start_server(host=args.host, port=args.port, reload=args.reload)


COMMANDS = {
    "parse": run_parse,
    "registry": run_registry,
    "decode": run_decode,
}


def main(argv=None) -> int:
    """Main entry point for the Showrunner CLI."""
    args = build_parser().parse_args(argv)

    if args.debug:
        log_level = LogLevel.DEBUG
    elif args.verbose:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.WARNING
    setup_logging(level=log_level, verbose=args.verbose or args.debug)

    logger = get_logger("main")

    try:
        config = load_config(Path(args.config) if args.config else None)
        if args.command == "serve":
            run_serve(args, config)
            return 0
        result = COMMANDS[args.command](args, config)
    except ShowrunnerError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
