"""
GRAPHGEN INFRASTRUCTURE - System-Level Modules

This package contains infrastructure components:
- config_graph: TOML settings loaded once into frozen msgspec structs
- logger: Generation event logging with a thread-safe ring buffer
"""

from infrastructure.config_graph import (
    GenerationSettings,
    ValidationSection,
    get_settings,
    load_settings,
    reset_settings,
    set_settings,
    settings_from_dict,
)
from infrastructure.logger import (
    GenerationEvent,
    GenerationEventType,
    GenerationLogger,
    configure_logging,
    get_generation_logger,
    reset_generation_logger,
)

__all__ = [
    "GenerationSettings",
    "ValidationSection",
    "get_settings",
    "load_settings",
    "reset_settings",
    "set_settings",
    "settings_from_dict",
    "GenerationEvent",
    "GenerationEventType",
    "GenerationLogger",
    "configure_logging",
    "get_generation_logger",
    "reset_generation_logger",
]
