"""Command line entry point: send one structured log event."""

import argparse
from typing import Dict, List, Optional

from logdispatch.dispatcher import LogDispatcher
from logdispatch.logger import make_console_logger
from logdispatch.record import LogRecord
from logdispatch.settings import Settings


def _parse_fields(parser: argparse.ArgumentParser, raw: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            parser.error(f"--field expects key=value, got {item!r}")
        out[key] = value
    return out


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a structured log event to Graylog")
    parser.add_argument("message", help="Log message")
    parser.add_argument("--host", default=settings.graylog_host, help="Collector host")
    parser.add_argument("--port", default=settings.graylog_port, help="Collector port")
    parser.add_argument("--protocol", default=settings.protocol, help="udp or tcp")
    parser.add_argument("--app", default=settings.app_name, help="Application name")
    parser.add_argument("--level", default="INFO", help="INFO, ERROR, DEBUG or WARN")
    parser.add_argument(
        "--field", action="append", default=[], metavar="KEY=VALUE",
        help="Extra record field, e.g. tr_id=abc (repeatable)",
    )
    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    try:
        record = LogRecord.from_fields(**_parse_fields(parser, args.field))
    except ValueError as e:
        parser.error(str(e))

    dispatcher = LogDispatcher(
        args.host,
        args.port,
        args.protocol,
        app_name=args.app,
        console=make_console_logger(level=settings.log_level),
        timeout=settings.timeout,
    )
    dispatcher.log(args.level, args.message, record)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
