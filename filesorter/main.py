"""
FileSorter - Main entry point.

Watches a drop folder and moves every new file into
<sorted>/<category>/<year>/<month>/ based on its extension.

Usage:
    python -m filesorter.main
    python -m filesorter.main UNSORTED_DIR SORTED_DIR
    python -m filesorter.main --config path/to/config.json --no-debug

Or when installed:
    filesorter [UNSORTED_DIR SORTED_DIR] [options]
"""

import argparse
import os
import signal
import sys

from filesorter.config import ensure_directories, get_sorted_dir, get_unsorted_dir, load_config
from filesorter.exceptions import ConfigError, FatalSortError
from filesorter.logger import get_logger, setup_logging
from filesorter.sorter import FileSorter
from filesorter.watcher import FileWatcher


def build_parser():
    parser = argparse.ArgumentParser(
        prog='filesorter',
        description='Sort new files from a drop folder by type and date.'
    )
    parser.add_argument('dirs', nargs='*', metavar='DIR',
                        help='Unsorted and sorted directories (give both or neither)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to custom config.json')
    parser.add_argument('--debug', dest='debug', action='store_const', const=True, default=None,
                        help='Log debug messages')
    parser.add_argument('--no-debug', dest='debug', action='store_const', const=False,
                        help='Do not log debug messages')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Write the log to this file instead of stdout')
    parser.add_argument('--keep-running-on-error', action='store_true',
                        help='Keep watching after a file fails to move')
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.dirs) not in (0, 2):
        parser.error('give both the unsorted and the sorted directory, or neither')
    return args


def apply_overrides(config, args):
    """Apply command line arguments on top of the loaded configuration."""
    config = dict(config)
    if args.dirs:
        config['unsorted_dir'], config['sorted_dir'] = args.dirs
    if args.debug is not None:
        config['debug'] = args.debug
    if args.log_file:
        config['log_target'] = 'file'
        config['log_file'] = args.log_file
    if args.keep_running_on_error:
        config['exit_on_error'] = False
    return config


def main(argv=None):
    """Main startup orchestrator.

    1. Initialize logging
    2. Load configuration and apply CLI overrides
    3. Check the unsorted directory, create the sorted one
    4. Start the file watcher (blocks until shutdown)

    Returns:
        int: Process exit status.
    """
    args = parse_args(argv)

    # Step 1: Logging with defaults until the config is known
    setup_logging()
    logger = get_logger()

    # Step 2: Load config
    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1
    logger = setup_logging(config)

    unsorted_dir = get_unsorted_dir(config)
    sorted_dir = get_sorted_dir(config)
    logger.info(f"Unsorted Directory: {unsorted_dir}")
    logger.info(f"Sorted Directory: {sorted_dir}")

    # Step 3: Directories
    if not os.path.isdir(unsorted_dir):
        logger.error(f"Directory {unsorted_dir} doesn't exist!")
        return 1
    try:
        ensure_directories(config)
    except OSError as e:
        logger.critical(f"Cannot create sorted directory {sorted_dir}: {e}")
        return 1

    # Step 4: Watch
    sorter = FileSorter.from_config(config, sorted_dir)
    watcher = FileWatcher(
        sorter,
        unsorted_dir,
        exit_on_error=config['exit_on_error'],
        scan_existing=config['scan_existing_on_startup'],
    )

    def shutdown_handler(signum, frame):
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        watcher.stop()

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    logger.info("Watching for new files. Press Ctrl+C to exit.")
    try:
        watcher.start()
    except FatalSortError as e:
        logger.critical(f"Terminating! {e}")
        return 1
    except OSError as e:
        logger.critical(f"Cannot watch {unsorted_dir}: {e}", exc_info=True)
        return 1

    logger.info("Exiting program, goodbye!")
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
