"""Enums shared by the configuration store records."""

from __future__ import annotations

from enum import StrEnum


class DomainStatus(StrEnum):
    """Administrative state of a domain."""

    NEW = "new"
    ENABLED = "enabled"
    DISABLED = "disabled"
