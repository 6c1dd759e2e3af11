"""
Claude Code plugin loader.

Reads a plugin directory into a ClaudePlugin:
- .claude-plugin/plugin.json (or plugin.json): manifest, "name"
- agents/*.md: agents with YAML frontmatter (name, description, capabilities)
- commands/**/*.md: slash commands, nested dirs become "dir:name"
- skills/<name>/SKILL.md: pass-through skill directories
- .mcp.json: "mcpServers"
- hooks/hooks.json: "hooks"
- CLAUDE.md: root instruction document

Unreadable or malformed files are logged and skipped.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from plugin_bridge.core.errors import PluginLoadError
from plugin_bridge.core.types import (
    ClaudeAgent,
    ClaudeCommand,
    ClaudeMcpServer,
    ClaudePlugin,
    ClaudeSkill,
)
from plugin_bridge.utils import extract_yaml_frontmatter, read_json, safe_read_text

logger = logging.getLogger(__name__)

MANIFEST_PATHS = (Path(".claude-plugin") / "plugin.json", Path("plugin.json"))


def _as_list(value: Any) -> Optional[List[str]]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        items = [s.strip() for s in value.split(",")]
    elif isinstance(value, list):
        items = [str(s).strip() for s in value]
    else:
        return None
    return [s for s in items if s] or None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _read_json_object(path: Path) -> Optional[Dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = read_json(path)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return None
    return data


def load_manifest_name(root: Path) -> str:
    for relative in MANIFEST_PATHS:
        data = _read_json_object(root / relative)
        if data and isinstance(data.get("name"), str) and data["name"].strip():
            return data["name"].strip()
    return root.name


def load_agents(root: Path) -> List[ClaudeAgent]:
    agents_dir = root / "agents"
    if not agents_dir.is_dir():
        return []

    agents = []
    for agent_file in sorted(agents_dir.glob("*.md")):
        content = safe_read_text(agent_file)
        if content is None:
            continue
        frontmatter, body = extract_yaml_frontmatter(content)
        frontmatter = frontmatter or {}
        agents.append(
            ClaudeAgent(
                name=_as_text(frontmatter.get("name")) or agent_file.stem,
                description=_as_text(frontmatter.get("description")),
                capabilities=_as_list(frontmatter.get("capabilities")),
                body=body,
            )
        )
    return agents


def load_commands(root: Path) -> List[ClaudeCommand]:
    commands_dir = root / "commands"
    if not commands_dir.is_dir():
        return []

    commands = []
    for command_file in sorted(commands_dir.rglob("*.md")):
        content = safe_read_text(command_file)
        if content is None:
            continue
        frontmatter, body = extract_yaml_frontmatter(content)
        frontmatter = frontmatter or {}
        # commands/workflows/plan.md -> workflows:plan
        default_name = ":".join(command_file.relative_to(commands_dir).with_suffix("").parts)
        commands.append(
            ClaudeCommand(
                name=_as_text(frontmatter.get("name")) or default_name,
                description=_as_text(frontmatter.get("description")),
                body=body,
            )
        )
    return commands


def load_skills(root: Path) -> List[ClaudeSkill]:
    skills_dir = root / "skills"
    if not skills_dir.is_dir():
        return []

    return [
        ClaudeSkill(name=entry.name, source_dir=entry)
        for entry in sorted(skills_dir.iterdir())
        if entry.is_dir() and (entry / "SKILL.md").is_file()
    ]


def load_mcp_servers(root: Path) -> Optional[Dict[str, ClaudeMcpServer]]:
    data = _read_json_object(root / ".mcp.json")
    if data is None:
        return None

    servers = data.get("mcpServers", {})
    if not isinstance(servers, dict):
        logger.warning("Ignoring .mcp.json: 'mcpServers' must be an object")
        return None

    result: Dict[str, ClaudeMcpServer] = {}
    for name, config in servers.items():
        if not isinstance(config, dict):
            logger.warning("Skipping MCP '%s': config is not a dict", name)
            continue
        command = config.get("command")
        if command is not None and not isinstance(command, str):
            logger.warning("Skipping MCP '%s': 'command' must be a string", name)
            continue
        args = config.get("args")
        if args is not None and not isinstance(args, list):
            logger.warning("Skipping MCP '%s': 'args' must be a list", name)
            continue
        env = config.get("env")
        if env is not None and not isinstance(env, dict):
            logger.warning("Skipping MCP '%s': 'env' must be a dict", name)
            continue
        result[name] = ClaudeMcpServer(
            command=command,
            args=[str(a) for a in args] if args is not None else None,
            env={str(k): str(v) for k, v in env.items()} if env is not None else None,
            url=config.get("url"),
            type=config.get("type"),
        )
    return result


def load_hooks(root: Path) -> Optional[Dict[str, Any]]:
    data = _read_json_object(root / "hooks" / "hooks.json")
    if data is None:
        return None
    hooks = data.get("hooks")
    return hooks if isinstance(hooks, dict) else None


def load_instructions(root: Path) -> Optional[str]:
    claude_md = root / "CLAUDE.md"
    if not claude_md.is_file():
        return None
    return safe_read_text(claude_md)


def load_plugin(root: Path) -> ClaudePlugin:
    """Load a Claude Code plugin directory. Raises PluginLoadError if root is missing."""
    root = Path(root).resolve()
    if not root.is_dir():
        raise PluginLoadError(f"Plugin directory not found: {root}")

    return ClaudePlugin(
        root=root,
        name=load_manifest_name(root),
        agents=load_agents(root),
        commands=load_commands(root),
        skills=load_skills(root),
        mcp_servers=load_mcp_servers(root),
        hooks=load_hooks(root),
        instructions=load_instructions(root),
    )
