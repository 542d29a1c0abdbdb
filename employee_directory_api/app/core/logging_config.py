"""
Logging configuration for the application.

``configure_logging`` applies the logging section of ``Settings`` to the
root logger.  Handlers are attached once per process, however many
times ``create_app`` runs; levels are re-applied on every call.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings) -> None:
    """Configure the root logger from ``settings``.

    Adds a console handler, plus a file handler when ``log_file`` is
    set, unless the root logger already has handlers (pytest, a previous
    call).  ``debug`` forces the ``DEBUG`` level; otherwise ``log_level``
    applies and uvicorn's per-request access log is limited to warnings
    so that service messages stay readable.
    """
    root = logging.getLogger()
    if settings.debug:
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
