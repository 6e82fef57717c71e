"""Shared helpers: HTTP transport, logging and the error taxonomy."""
