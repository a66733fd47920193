#!/usr/bin/env python3
"""
Скрипт запуска веб-дашборда HabitFlow
Использование: python -m habitflow.scripts.start_web [--port PORT] [--host HOST] [--dev]
"""

import argparse
import logging

import uvicorn

from ..config import config
from ..utils.logger import configure_logging
from ..dashboard.app import create_app

logger = logging.getLogger(__name__)

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="HabitFlow Web Dashboard")
    parser.add_argument("--host", default=config.server.host, help="Хост для запуска")
    parser.add_argument("--port", type=int, default=config.server.port, help="Порт для запуска")
    parser.add_argument("--dev", action="store_true", help="Режим разработки (подробные логи)")
    return parser.parse_args(argv)

def main(argv=None) -> None:
    args = parse_args(argv)
    configure_logging(config)
    if args.dev or config.server.debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info(f"🌐 Dashboard доступен на: http://{args.host}:{args.port}")
    uvicorn.run(create_app(app_config=config), host=args.host, port=args.port, log_config=None)

if __name__ == "__main__":
    main()
