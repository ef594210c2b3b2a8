#!/usr/bin/env python3
"""
Run the AgentConnect API under uvicorn.

HOST, PORT and RELOAD come from the environment (or .env) and can be
overridden on the command line.
"""

import argparse
import logging
import os

import uvicorn

from app.config.settings import Settings, _as_bool

logger = logging.getLogger("start_server")


def build_parser():
    parser = argparse.ArgumentParser(description="Start the AgentConnect API server")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=_as_bool(os.getenv("RELOAD"), default=True),
        help="restart on code changes",
    )
    return parser


def main(argv=None, settings=None):
    args = build_parser().parse_args(argv)
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if settings.uses_default_secret:
        logger.warning("SECRET_KEY is not set; tokens are signed with the development default")
    logger.info(f"Serving AgentConnect on {args.host}:{args.port} (reload={args.reload})")

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
