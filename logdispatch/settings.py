"""
Pydantic-based configuration for logdispatch.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="LOGDISPATCH_"
    )

    # Collector
    graylog_host: str = "localhost"
    graylog_port: str = "12201"
    protocol: str = "udp"  # udp | tcp

    app_name: str = ""
    log_level: str = "INFO"

    # seconds; None blocks until the OS gives up
    timeout: Optional[float] = 5.0
