"""Data models for scan findings."""

from __future__ import annotations

from .finding import ROOT_LOCATION, Finding

__all__ = [
    "Finding",
    "ROOT_LOCATION",
]
