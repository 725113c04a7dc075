"""Command line entry point for the image service."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from . import SettingsStore
from .client import ImageServiceClient
from .formatting import print_results
from .models.azure_vision import AzureVisionAnalyzer
from .models.base import ConfigurationError
from .server.app import create_app
from .services.analyzer import ImageAnalysisService
from .storage.uploader import TemporaryImageUploader

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Image analysis service")
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (YAML or JSON). Defaults to the per-user settings path.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze one image URL and print a report.")
    analyze.add_argument("url", nargs="?", help="Image URL. Defaults to the sample image.")

    serve = commands.add_parser("serve", help="Run the HTTP front door.")
    serve.add_argument("--host", help="Override the configured bind address.")
    serve.add_argument("--port", type=int, help="Override the configured port.")

    client = commands.add_parser("client", help="Call a running service by URL and/or upload.")
    client.add_argument("--base-url", help="Override the configured service base URL.")
    client.add_argument("--image-url", help="Image URL to analyze remotely.")
    client.add_argument("--file", type=Path, help="Local image to upload and analyze.")

    commands.add_parser("purge", help="Delete staged uploads whose expiry time has passed.")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    store = SettingsStore(path=args.config)
    config = store.load()

    try:
        if args.command == "analyze":
            config.require_vision()
            service = ImageAnalysisService(AzureVisionAnalyzer.from_config(config))
            result = service.analyze_image(args.url or config.sample_image_url)
            print_results(result)
        elif args.command == "serve":
            app = create_app(config)
            uvicorn.run(
                app,
                host=args.host or config.server_host,
                port=args.port or config.server_port,
                log_level=args.log_level.lower(),
            )
        elif args.command == "client":
            _run_client(args, config)
        elif args.command == "purge":
            uploader = TemporaryImageUploader.from_config(config)
            removed = uploader.purge_expired()
            json.dump(removed, sys.stdout, indent=2)
            sys.stdout.write("\n")
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc


def _run_client(args: argparse.Namespace, config) -> None:
    base_url = args.base_url or config.service_base_url
    image_url = args.image_url
    if image_url is None and args.file is None:
        image_url = config.sample_image_url

    with ImageServiceClient(base_url, timeout=config.http_timeout) as client:
        if image_url:
            print(f"\nAnalyzing image from URL: {image_url}")
            client.analyze_from_url(image_url)
        if image_url and args.file:
            print("\n-----------------------------\n")
        if args.file:
            print(f"Uploading and analyzing local image: {args.file}")
            client.upload_and_analyze(args.file)


if __name__ == "__main__":  # pragma: no cover
    main()
