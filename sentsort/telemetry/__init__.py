"""Telemetry and observability helpers.

This package emits run events for deterministic auditing of exports.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
