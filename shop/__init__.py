"""Shop API: catalog of categories and products behind a JWT-guarded HTTP API."""

# Registers the TRACE level on logging.Logger before any module logs with it.
from shop.core import logging_config  # noqa: F401
