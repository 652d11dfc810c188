# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Comment parser adapters for the documentation model."""

from docmodel.parsers.dox import DoxCommandParser, DoxJsonParser

__all__ = ["DoxCommandParser", "DoxJsonParser"]
