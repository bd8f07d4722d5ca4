# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Named loggers used across the Mailgun client.

Each module asks for its own logger by name:

- ``MailgunEncoder``: body selection and attachment reads (debug);
- ``Dispatcher``: async sends, rejections (warning) and queued ids (info);
- ``MailgunClient``: the same events for the blocking client.

The library never installs handlers. Applications decide level and format,
e.g. ``logging.getLogger("Dispatcher").setLevel(logging.DEBUG)``.
"""

import logging


def get_logger(name: str = "MailgunClient") -> logging.Logger:
    """Return the library logger called ``name``."""
    return logging.getLogger(name)
