# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Built-in module processors."""

from docmodel.processor import ProcessorFactory
from docmodel.processors.require import require_processor

BUILTIN_PROCESSORS: dict[str, ProcessorFactory] = {
    "require": require_processor,
}

__all__ = ["BUILTIN_PROCESSORS", "require_processor"]
