"""
Log record field model plus the severity and transport enums.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Union


class Severity(str, Enum):
    INFO = "INFO"
    ERROR = "ERROR"
    DEBUG = "DEBUG"
    WARN = "WARN"

    @classmethod
    def parse(cls, value: Union[str, "Severity"]) -> "Severity":
        """Map a level token to its bucket; unknown tokens land in WARN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.WARN

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.ERROR: logging.ERROR,
    Severity.DEBUG: logging.DEBUG,
    Severity.WARN: logging.WARNING,
}


class Transport(str, Enum):
    UDP = "udp"
    TCP = "tcp"

    @classmethod
    def parse(cls, value: Union[str, "Transport"]) -> "Transport":
        """Raises ValueError for anything but exactly "udp" or "tcp"."""
        if isinstance(value, cls):
            return value
        return cls(value)


def _key(name: str, always: bool = False):
    return field(default="", metadata={"key": name, "always": always})


@dataclass
class LogRecord:
    timestamp: str = _key("timestamp", always=True)
    level: str = _key("level", always=True)
    message: str = _key("message")
    ip_address: str = _key("ip_address")
    app_name: str = _key("appname", always=True)
    hostname: str = _key("hostname")
    transaction_id: str = _key("tr_id")
    channel: str = _key("channel")
    bank_code: str = _key("bank_code")
    reference_id: str = _key("reference_id")
    rrn: str = _key("rrn")
    publish_id: str = _key("publish_id")
    cf_trid: str = _key("cf_trid")
    device_info: str = _key("device_info")
    param_a: str = _key("param_a")
    param_b: str = _key("param_b")
    param_c: str = _key("param_c")

    @classmethod
    def from_fields(cls, **values: Any) -> "LogRecord":
        """Build a record from wire keys (``tr_id``) or attribute names (``transaction_id``)."""
        by_key = {f.metadata["key"]: f.name for f in fields(cls)}
        names = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for k, v in values.items():
            if k in by_key:
                kwargs[by_key[k]] = v
            elif k in names:
                kwargs[k] = v
            else:
                raise ValueError(f"unknown log field: {k}")
        return cls(**kwargs)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.metadata["always"] or value:
                payload[f.metadata["key"]] = value
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"))
