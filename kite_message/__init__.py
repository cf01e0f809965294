"""Validation for message-builder payloads before webhook delivery."""

__version__ = "0.1.0"
