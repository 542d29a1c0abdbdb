"""
Application package.

Contains the FastAPI entrypoint (``main``) and its layers: ``core``
(configuration, logging, security, database), ``repositories`` (the
document store gateway), ``services`` (business rules), ``schemas``
(request and response models) and ``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401
