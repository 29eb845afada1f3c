"""Exceptions raised by captureorder."""

from __future__ import annotations


class CaptureOrderError(Exception):
    """Base class for service errors."""


class ConfigurationError(CaptureOrderError):
    """Required settings are missing or inconsistent."""
