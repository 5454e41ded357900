"""
CLI Serve Command

Run the HTTP service under uvicorn.

Usage:
    sigil serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from argparse import Namespace

import uvicorn

from api.app import create_app
from core.config.runtime import load_service_config, set_default_config


logger = logging.getLogger(__name__)


def serve_cmd(args: Namespace) -> int:
    """Load the service config, apply CLI overrides and serve until interrupted."""
    config = load_service_config(args.service_config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    set_default_config(config)
    app = create_app(config)
    logger.info(f"Serving on {config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0
