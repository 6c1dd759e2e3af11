"""Target converters: Claude plugin -> target bundle."""

from plugin_bridge.converters.copilot import CopilotBundle, convert_claude_to_copilot
from plugin_bridge.converters.kiro import KiroBundle, convert_claude_to_kiro

__all__ = [
    "CopilotBundle",
    "KiroBundle",
    "convert_claude_to_copilot",
    "convert_claude_to_kiro",
]
