"""Telemetry helpers for formatcleaner."""

from .logger import RunLogger

__all__ = ["RunLogger"]
