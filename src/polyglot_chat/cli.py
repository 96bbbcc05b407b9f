"""
Command-line interface for Polyglot Chat.

Provides CLI commands for running and exercising the translator:
- run: Start the API server and browser chat shell
- languages: List the target-language catalog
- translate: Translate one message from the terminal
- config: Print the effective configuration

Usage:
    polyglot-chat run [--port PORT] [--host HOST]
    polyglot-chat languages
    polyglot-chat translate "Good morning" --to Spanish [--file notes.txt] [--json]
    polyglot-chat config

Environment Variables:
    GEMINI_API_KEY: API key for the Gemini model (required for translation)
    POLYGLOT_HOST: Host to bind the server (default: 0.0.0.0)
    POLYGLOT_PORT: Port for the server (default: 8000)
"""

import argparse
import json
import sys

from polyglot_chat.config import config, print_config_summary
from polyglot_chat.logging_setup import configure_logging


def cmd_run(args: argparse.Namespace) -> int:
    """
    Start the API server and web shell with uvicorn.

    Resolution order for host and port:
    1. CLI argument (--host / --port)
    2. Configuration (POLYGLOT_HOST / POLYGLOT_PORT, then server.ini)
    """
    import uvicorn

    host = getattr(args, "host", None) or config.server.host
    port = getattr(args, "port", None) or config.server.port

    if not config.gemini.has_api_key:
        print(
            "Warning: GEMINI_API_KEY is not set; every translation will report "
            "a communication error.",
            file=sys.stderr,
        )

    print(f"Polyglot Chat running at http://{host}:{port}/chat")
    try:
        uvicorn.run("polyglot_chat.api.server:app", host=host, port=port, log_config=None)
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


def cmd_languages(args: argparse.Namespace) -> int:
    """Print the target-language catalog, one entry per line."""
    from polyglot_chat.translation.languages import LANGUAGES

    width = max(len(option.code) for option in LANGUAGES)
    for option in LANGUAGES:
        print(f"{option.code:<{width}}  {option.name}")
    return 0


def cmd_translate(args: argparse.Namespace) -> int:
    """
    Translate one message and print the result.

    Exit status is 0 when the model returned a structured translation and
    2 for any fallback outcome (the result is still printed).
    """
    from polyglot_chat.services.attachments import AttachmentError, AttachmentIngestor
    from polyglot_chat.translation import TranslationService, TranslationSessionConfig

    ingestor = AttachmentIngestor(max_bytes=config.attachments.max_bytes)
    try:
        attachments = [ingestor.ingest_path(path) for path in args.file or []]
    except (AttachmentError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    service = TranslationService.from_config(TranslationSessionConfig.from_settings(config.gemini))
    sent = service.send(args.text or "", attachments, args.to)

    if args.json:
        print(
            json.dumps(
                {"outcome": sent.outcome.value, "result": sent.result.to_dict()},
                ensure_ascii=False,
                indent=2,
            )
        )
    else:
        result = sent.result
        print(f"[{result.detected_language} -> {sent.target_language}, {result.confidence}]")
        print(result.primary_translation)
        print()
        print(f"  Formal: {result.tones.formal}")
        print(f"  Casual: {result.tones.casual}")
        print(f"  Simple: {result.tones.simple}")
        for alternative in result.alternatives:
            print(f"  - {alternative}")
        if result.cultural_note and result.cultural_note != "None":
            print(f"\nNote: {result.cultural_note}")

    return 0 if sent.outcome.is_success else 2


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    print_config_summary()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="polyglot-chat",
        description="Polyglot Chat - conversational translation powered by Gemini",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the server",
        description="Start the API server and the browser chat shell.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Server port (default: 8000, or POLYGLOT_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: 0.0.0.0, or POLYGLOT_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    # languages command
    languages_parser = subparsers.add_parser(
        "languages",
        help="List target languages",
    )
    languages_parser.set_defaults(func=cmd_languages)

    # translate command
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate one message",
        description="Send one message (and optional files) to the model and print the result.",
    )
    translate_parser.add_argument("text", nargs="?", default="", help="Text to translate")
    translate_parser.add_argument(
        "--to",
        default=None,
        help="Target language code or name (default: English)",
    )
    translate_parser.add_argument(
        "--file",
        "-f",
        action="append",
        help="Image or .txt file to attach (repeatable)",
    )
    translate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw result as JSON",
    )
    translate_parser.set_defaults(func=cmd_translate)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(config.logging)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
