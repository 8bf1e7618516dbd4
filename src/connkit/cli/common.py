from __future__ import annotations

import argparse
import logging

from connkit.config import Settings, load_settings
from connkit.store import JsonFileStore

logger = logging.getLogger(__name__)


def load_cli_settings(args: argparse.Namespace) -> Settings:
    return load_settings(
        args.config,
        cli_overrides={
            "store_path": args.store,
            "exec_mode": getattr(args, "exec_mode", None),
            "log_level": "DEBUG" if args.verbose else None,
        },
    )


def open_store(settings: Settings) -> JsonFileStore:
    logger.debug("Using connection store %s", settings.store_path)
    return JsonFileStore(settings.store_path)
