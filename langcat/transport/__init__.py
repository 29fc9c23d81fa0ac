"""Catalog API transport."""

from langcat.transport.client import HttpTransport, TransportClient, error_message

__all__ = ["TransportClient", "HttpTransport", "error_message"]
