"""
logdispatch – structured log dispatcher

• Stamps every event with UTC timestamp, hostname and local IPv4
• Writes the JSON line to the console (python-json-logger)
• Ships the same JSON to a Graylog-style collector over UDP or TCP
• Delivery problems are reported on the console, never raised to the caller
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from logdispatch import network
from logdispatch.logger import make_console_logger
from logdispatch.record import LogRecord, Severity, Transport
from logdispatch.settings import Settings

RFC3339 = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime(RFC3339)


class LogDispatcher:
    def __init__(
        self,
        host: str,
        port: Union[int, str],
        protocol: Union[str, Transport] = Transport.UDP,
        *,
        app_name: str = "",
        console: Optional[logging.Logger] = None,
        timeout: Optional[float] = 5.0,
    ):
        self._console = console if console is not None else make_console_logger()
        self._host = host
        self._port = port
        self._app_name = app_name
        self._timeout = timeout

        try:
            self._transport = Transport.parse(protocol)
        except ValueError:
            self._console.warning(
                "invalid protocol, defaulting to udp",
                extra={"protocol": str(protocol)},
            )
            self._transport = Transport.UDP

    @classmethod
    def from_settings(
        cls, settings: Settings, console: Optional[logging.Logger] = None
    ) -> "LogDispatcher":
        if console is None:
            console = make_console_logger(level=settings.log_level)
        return cls(
            settings.graylog_host,
            settings.graylog_port,
            settings.protocol,
            app_name=settings.app_name,
            console=console,
            timeout=settings.timeout,
        )

    # ------------------------------------------------------------------ #
    # read-only configuration                                            #
    # ------------------------------------------------------------------ #
    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> Union[int, str]:
        return self._port

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def console(self) -> logging.Logger:
        return self._console

    @property
    def address(self) -> str:
        host = f"[{self._host}]" if ":" in self._host else self._host
        return f"{host}:{self._port}"

    # ------------------------------------------------------------------ #
    # dispatch                                                           #
    # ------------------------------------------------------------------ #
    def log(
        self,
        level: Union[str, Severity],
        message: str,
        record: Optional[LogRecord] = None,
    ) -> None:
        severity = Severity.parse(level)
        data = dataclasses.replace(record) if record is not None else LogRecord()

        data.timestamp = utc_timestamp()
        data.message = message
        data.level = severity.value
        if not data.app_name:
            data.app_name = self._app_name
        data.hostname = network.get_hostname()
        data.ip_address = network.get_local_ip()

        try:
            body = data.to_json()
        except (TypeError, ValueError) as e:
            self._console.error(
                "failed to serialize log record",
                extra={"level": severity.value, "err": str(e)},
            )
            return

        self._console.log(severity.logging_level, body)
        self._send(body.encode("utf-8"))

    def info(self, message: str, record: Optional[LogRecord] = None) -> None:
        self.log(Severity.INFO, message, record)

    def error(self, message: str, record: Optional[LogRecord] = None) -> None:
        self.log(Severity.ERROR, message, record)

    def debug(self, message: str, record: Optional[LogRecord] = None) -> None:
        self.log(Severity.DEBUG, message, record)

    def warn(self, message: str, record: Optional[LogRecord] = None) -> None:
        self.log(Severity.WARN, message, record)

    def _send(self, payload: bytes) -> None:
        transport = self._transport.value
        if self._transport is Transport.TCP:
            sender = network.send_tcp
        else:
            sender = network.send_udp
        try:
            sender(self._host, self._port, payload, self._timeout)
        except (OSError, ValueError) as e:
            self._console.warning(
                f"failed to send log via {transport}",
                extra={"target": self.address, "err": str(e)},
            )
            return
        self._console.info(
            f"log sent via {transport}", extra={"target": self.address}
        )
