"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Routers live in ``api/v1/endpoints``, business logic in
``services``, request and document models in ``schemas`` and
configuration, logging, security and storage in ``core``.
"""

from .main import app  # noqa: F401
