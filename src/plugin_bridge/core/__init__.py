"""Core abstractions for Plugin Bridge."""

from .errors import PluginBridgeError, PluginLoadError, UnsafePathError
from .naming import NameRegistry, normalize_name, sanitize_description, unique_name
from .transform import COPILOT_DIALECT, KIRO_DIALECT, Dialect, transform_content
from .types import (
    ClaudeAgent,
    ClaudeCommand,
    ClaudeMcpServer,
    ClaudePlugin,
    ClaudeSkill,
    ConversionResult,
    ConvertOptions,
)

__all__ = [
    "PluginBridgeError",
    "PluginLoadError",
    "UnsafePathError",
    "NameRegistry",
    "normalize_name",
    "sanitize_description",
    "unique_name",
    "COPILOT_DIALECT",
    "KIRO_DIALECT",
    "Dialect",
    "transform_content",
    "ClaudeAgent",
    "ClaudeCommand",
    "ClaudeMcpServer",
    "ClaudePlugin",
    "ClaudeSkill",
    "ConversionResult",
    "ConvertOptions",
]
