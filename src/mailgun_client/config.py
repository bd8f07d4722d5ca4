# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Credentials and endpoint configuration.

Settings are read from an INI file, with environment variables as
fallbacks for every option not present in the file.

Environment variables:
    MAILGUN_CONFIG - Path to the INI file (default: mailgun.ini)
    MAILGUN_API_KEY - Secret API key
    MAILGUN_DOMAIN - Sending domain
    MAILGUN_API_BASE - API root URL (overrides the region)
    MAILGUN_REGION - "us" (default) or "eu"

Example:
    Configuration file format (mailgun.ini)::

        [mailgun]
        api_key = key-0123456789
        domain = mg.example.com
        region = eu

    Loading it::

        config = load_config("/etc/myapp/mailgun.ini")
        dispatcher = config.dispatcher()
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

import aiohttp

from .client import MailgunClient
from .dispatcher import DEFAULT_API_BASE, EU_API_BASE, Dispatcher
from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger("MailgunConfig")

SECTION = "mailgun"

REGION_API_BASES = {
    "us": DEFAULT_API_BASE,
    "eu": EU_API_BASE,
}


def api_base_for_region(region: str | None) -> str:
    """Return the API root for a Mailgun region.

    Raises:
        ConfigurationError: If the region is unknown.
    """
    if not region:
        return DEFAULT_API_BASE
    try:
        return REGION_API_BASES[region.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown Mailgun region '{region}', expected one of: {', '.join(REGION_API_BASES)}"
        ) from None


@dataclass
class MailgunConfig:
    """Credentials for one sending domain.

    Attributes:
        api_key: Secret API key.
        domain: Sending domain.
        api_base: API root URL.
        region: Region the api_base was derived from, if any.
    """

    api_key: str
    domain: str
    api_base: str = DEFAULT_API_BASE
    region: str | None = None

    def dispatcher(self, session: aiohttp.ClientSession | None = None) -> Dispatcher:
        """Build an async dispatcher for these credentials."""
        return Dispatcher(self.api_key, self.domain, self.api_base, session=session)

    def client(self) -> MailgunClient:
        """Build a blocking client for these credentials."""
        return MailgunClient(self.api_key, self.domain, self.api_base)

    def __repr__(self) -> str:
        return f"MailgunConfig(domain='{self.domain}', api_base='{self.api_base}', api_key='***')"


def load_config(config_path: str | Path | None = None) -> MailgunConfig:
    """Load credentials from an INI file and the environment.

    A missing file is not an error: every option can come from the
    environment instead.

    Args:
        config_path: Path to the INI file. Defaults to ``$MAILGUN_CONFIG``
            or ``mailgun.ini``.

    Returns:
        The resolved configuration.

    Raises:
        ConfigurationError: If the API key or the domain is missing, or the
            region is unknown.
    """
    path = Path(config_path or os.getenv("MAILGUN_CONFIG", "mailgun.ini"))
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path)
    else:
        logger.debug("Config file %s not found, using environment only", path)

    def get(option: str, fallback: str | None = None) -> str | None:
        if parser.has_option(SECTION, option):
            value = parser.get(SECTION, option).strip()
        else:
            value = (fallback or "").strip()
        return value or None

    api_key = get("api_key", os.getenv("MAILGUN_API_KEY"))
    domain = get("domain", os.getenv("MAILGUN_DOMAIN"))
    region = get("region", os.getenv("MAILGUN_REGION"))
    api_base = get("api_base", os.getenv("MAILGUN_API_BASE"))

    if not api_key:
        raise ConfigurationError("Mailgun api_key is not configured")
    if not domain:
        raise ConfigurationError("Mailgun domain is not configured")

    return MailgunConfig(
        api_key=api_key,
        domain=domain,
        api_base=(api_base or api_base_for_region(region)).rstrip("/"),
        region=region,
    )
