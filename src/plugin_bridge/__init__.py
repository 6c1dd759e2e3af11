"""
Plugin Bridge - Convert Claude Code plugins for other AI coding assistants.

Converts agents, commands, skills, MCP servers and CLAUDE.md to:
- Kiro CLI (.kiro/)
- GitHub Copilot (.github/)
"""

__version__ = "1.0.0"

__all__ = [
    "cli",
    "converters",
    "core",
    "loader",
    "targets",
    "utils",
]
