"""HTTP transport used by generated service functions."""

from rest_services.transport.http import HttpTransport

__all__ = ["HttpTransport"]
