"""Bell settings: model, validation, and file IO."""

from .io import dump_settings, load_settings, read_settings_data
from .models import (
    Settings,
    SettingsValidation,
    default_settings,
    generate_from_settings,
    validate_settings,
)

__all__ = [
    "Settings",
    "SettingsValidation",
    "default_settings",
    "generate_from_settings",
    "validate_settings",
    "dump_settings",
    "load_settings",
    "read_settings_data",
]
