#!/usr/bin/env python3
"""
CodeDNA - command line entry point.

Analyzes a local codebase's internal dependency graph, or serves the
analysis API over HTTP.
"""

import argparse
import json
import sys
from pathlib import Path

from .config import settings
from .utils.logger import app_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CodeDNA - dependency graph analytics")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a local directory")
    analyze.add_argument("path", help="Root directory of the codebase")
    analyze.add_argument("--output", "-o", help="Write JSON result to this file instead of stdout")
    analyze.add_argument("--indent", type=int, default=2, help="JSON indentation")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.api_host, help="Host to bind")
    serve.add_argument("--port", type=int, default=settings.api_port, help="Port to bind")

    return parser


def run_analyze(args) -> int:
    from .pipeline import analyze_directory

    result = analyze_directory(args.path)
    payload = json.dumps({"success": True, **result.to_dict()}, indent=args.indent)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        app_logger.info(f"Wrote analysis to {args.output}")
    else:
        sys.stdout.write(payload + "\n")
    return 0


def run_serve(args) -> int:
    import uvicorn

    app_logger.info(f"Starting CodeDNA API on {args.host}:{args.port}")
    uvicorn.run("codedna.api_server:app", host=args.host, port=args.port, log_level="info")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    # The server keeps a rotating log file by default; one-shot analysis logs to stderr only
    log_file = args.log_file or (settings.log_file if args.command == "serve" else None)
    setup_logging(args.log_level, log_file)

    try:
        if args.command == "analyze":
            return run_analyze(args)
        return run_serve(args)
    except KeyboardInterrupt:
        app_logger.info("Shutting down...")
        return 130
    except NotADirectoryError as e:
        app_logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
