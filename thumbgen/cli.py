"""
Command Line Interface for the thumbnail server.
"""

import argparse
import dataclasses
import json
import logging
import os
from typing import List, Optional

from .pipeline import ConfigurationError, ThumbnailPipeline
from .server import run_server
from .upload_config import UploadConfig


def setup_logging(verbose: bool, level_name: str = 'INFO') -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('thumbgen')


def get_config(args: argparse.Namespace) -> UploadConfig:
    """Get configuration from environment and CLI overrides."""
    config = UploadConfig.from_env()
    overrides = {}

    if getattr(args, 'upload_dir', None):
        overrides['upload_dir'] = args.upload_dir
    if getattr(args, 'workers', None):
        overrides['workers'] = args.workers
    if getattr(args, 'host', None):
        overrides['host'] = args.host
    if getattr(args, 'port', None):
        overrides['port'] = args.port

    return dataclasses.replace(config, **overrides)


def load_config(args: argparse.Namespace, logger: logging.Logger) -> Optional[UploadConfig]:
    """Build and validate configuration, logging each problem."""
    try:
        config = get_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration value: {e}")
        return None

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return None
    return config


def cmd_serve(args: argparse.Namespace) -> int:
    """Execute serve command."""
    logger = setup_logging(args.verbose, os.getenv('THUMBGEN_LOG_LEVEL', 'INFO'))

    config = load_config(args, logger)
    if config is None:
        return 1

    logger.info(f"Upload dir: {os.path.abspath(config.upload_dir)}")
    logger.info(f"Limits: {config.max_files} files, {config.max_file_size} bytes each")

    try:
        run_server(config)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    return 0


def cmd_process(args: argparse.Namespace) -> int:
    """Execute process command: derive thumbnails for one local image."""
    logger = setup_logging(args.verbose, os.getenv('THUMBGEN_LOG_LEVEL', 'INFO'))

    config = load_config(args, logger)
    if config is None:
        return 1

    if not os.path.isfile(args.image):
        logger.error(f"Image not found: {args.image}")
        return 1

    try:
        pipeline = ThumbnailPipeline(config, max_workers=config.workers, logger=logger)
        manifest = pipeline.process_image(args.image, args.name or os.path.basename(args.image))
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(manifest.to_dict(), indent=2))

    for key in manifest.failed:
        logger.warning(f"{key}: {manifest.thumbnails[key].error}")

    return 0 if manifest.all_succeeded else 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='thumbgen',
        description='Image upload server with fixed-size thumbnail derivation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m thumbgen serve --port 8000
  python -m thumbgen process photo.jpg --workers 4

Configuration is read from THUMBGEN_* environment variables; flags override them.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    serve_parser = subparsers.add_parser('serve', help='Run the upload HTTP server')
    serve_parser.add_argument('--host', help='Override HOST')
    serve_parser.add_argument('--port', type=int, help='Override PORT')
    serve_parser.add_argument('--upload-dir', help='Override THUMBGEN_UPLOAD_DIR')
    serve_parser.add_argument('--workers', type=int, help='Override THUMBGEN_WORKERS')
    serve_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    process_parser = subparsers.add_parser('process', help='Generate thumbnails for one image')
    process_parser.add_argument('image', help='Path to the original image')
    process_parser.add_argument('--name', help='File name for the thumbnails (default: image basename)')
    process_parser.add_argument('--upload-dir', help='Override THUMBGEN_UPLOAD_DIR')
    process_parser.add_argument('--workers', type=int, help='Override THUMBGEN_WORKERS')
    process_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'serve':
        return cmd_serve(parsed_args)
    elif parsed_args.command == 'process':
        return cmd_process(parsed_args)

    return 1
