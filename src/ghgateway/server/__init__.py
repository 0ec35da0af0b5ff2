"""Inbound HTTP interface."""

from ghgateway.server.app import create_app, setup_logging

__all__ = ["create_app", "setup_logging"]
