#!/usr/bin/env python3
"""
mpdbar - MPD status block for i3bar / swaybar

Usage:
    python -m mpdbar                        # Defaults (127.0.0.1:6600)
    python -m mpdbar --config mpd.json      # Options from a JSON file

In the bar config:
    bar { status_command python -m mpdbar --config ~/.config/mpdbar.json }
"""
import sys
import signal
import logging
import argparse
from logging.handlers import RotatingFileHandler

from . import __version__
from .blocks import MpdBlock
from .config import (
    LOG_LEVEL, LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
    load_config,
)
from .errors import BlockError, ConfigError
from .handlers import EventListener
from .scheduler import Scheduler
from .ui import BarWriter


def setup_logging():
    """Configure logging with stderr and rotating file handlers."""
    level = getattr(logging, LOG_LEVEL, logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # stdout carries the bar protocol, so the console handler uses stderr
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')
    except OSError as e:
        root.warning(f'Could not create log file: {e}')

    # python-mpd2 logs every command at DEBUG
    logging.getLogger('mpd').setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='mpdbar', description=__doc__.strip().splitlines()[0])
    parser.add_argument('-c', '--config', help='JSON file with block options')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point for mpdbar."""
    args = parse_args(argv)
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(2)

    logger.info(f'mpdbar {__version__}')
    logger.info(f'MPD: {config.ip}, interval={config.interval}s')

    try:
        block = MpdBlock(config)
    except BlockError as e:
        logger.error(str(e))
        sys.exit(1)

    scheduler = Scheduler([block], BarWriter(sys.stdout))
    listener = EventListener(sys.stdin, scheduler.push_event)

    def handle_signal(signum, frame):
        logger.info(f'Received signal {signum}, shutting down')
        scheduler.stop()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    listener.start()
    try:
        scheduler.run()
    finally:
        listener.stop()
        logger.info('mpdbar stopped')


if __name__ == '__main__':
    main()
