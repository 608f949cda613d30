#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Todo lists web app (SQLite + FastAPI)

Commands:
  init                Create the lists/todos tables and the operation log
  serve               Run the web app with uvicorn

Notes:
- APP_ENV=production reads the database from DATABASE_URL; otherwise the local
  todos.db (or TODOS_DB_PATH / config.yaml db_path) is used.
- LOG_LEVEL (or config.yaml log_level) controls the statement log.
"""

import argparse
import logging
import sys

from todolists.config import get_setting
from todolists.db import ensure_schema, get_db_path
from todolists.logs import ensure_log_schema


def setup_logging():
    level = get_setting("log_level").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------- Commands ----------------

def cmd_init(args):
    ensure_schema()
    ensure_log_schema()
    print(f"DB initialized: {get_db_path()}")


def cmd_serve(args):
    import uvicorn

    ensure_schema()
    ensure_log_schema()
    uvicorn.run(
        "todolists.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Todo lists web app")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="create database tables")
    p_init.set_defaults(func=cmd_init)

    p_serve = sub.add_parser("serve", help="run the web server")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=4567)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=cmd_serve)
    return p


def main(argv=None):
    setup_logging()
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    sys.exit(main())
