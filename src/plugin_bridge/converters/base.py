"""
Building blocks shared by every target converter.

Each helper takes the run's NameRegistry / known agent names explicitly and
appends to a caller-owned warnings list; nothing here keeps state between
runs.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from plugin_bridge.core.naming import (
    NameRegistry,
    normalize_name,
    sanitize_description,
    unique_name,
)
from plugin_bridge.core.transform import Dialect, transform_content
from plugin_bridge.core.types import (
    ClaudeAgent,
    ClaudeCommand,
    ClaudeMcpServer,
    ClaudePlugin,
    ConvertOptions,
)
from plugin_bridge.utils import format_frontmatter

logger = logging.getLogger(__name__)


# =============================================================================
# BUNDLE RECORDS
# =============================================================================


@dataclass(frozen=True)
class GeneratedSkill:
    """A SKILL.md generated from a Claude command."""
    name: str
    content: str


@dataclass(frozen=True)
class SkillDir:
    """A skill directory copied as-is at write time."""
    name: str
    source_dir: Path


@dataclass(frozen=True)
class SteeringFile:
    name: str
    content: str


@dataclass(frozen=True)
class McpServer:
    command: str
    args: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, object]:
        entry: Dict[str, object] = {"command": self.command}
        if self.args:
            entry["args"] = list(self.args)
        if self.env:
            entry["env"] = dict(self.env)
        return entry


# =============================================================================
# HELPERS
# =============================================================================


def warn(warnings: List[str], message: str) -> None:
    """Record a conversion warning and log it."""
    logger.warning(message)
    warnings.append(message)


def reserve_skill_dirs(plugin: ClaudePlugin, registry: NameRegistry, dialect: Dialect) -> List[SkillDir]:
    """Pass-through skills own their names; reserve them before anything else."""
    skill_dirs = []
    for skill in plugin.skills:
        registry.reserve(normalize_name(skill.name, dialect.max_name_length))
        skill_dirs.append(SkillDir(name=skill.name, source_dir=skill.source_dir))
    return skill_dirs


def known_agent_names(plugin: ClaudePlugin, dialect: Dialect) -> List[str]:
    """Agent identifiers in source order, one per agent, deduplicated by suffix."""
    registry = NameRegistry()
    return [
        unique_name(normalize_name(agent.name, dialect.max_name_length), registry)
        for agent in plugin.agents
    ]


def agent_description(agent: ClaudeAgent, dialect: Dialect) -> str:
    return sanitize_description(
        agent.description or f"Use this agent for {agent.name} tasks",
        dialect.max_description_length,
    )


def agent_prompt_body(agent: ClaudeAgent, known_agents: Sequence[str], dialect: Dialect) -> str:
    """Transformed agent body, prefixed with its capabilities; never empty."""
    body = transform_content(agent.body.strip(), known_agents, dialect)
    if agent.capabilities:
        capabilities = "\n".join(f"- {c}" for c in agent.capabilities)
        body = f"## Capabilities\n{capabilities}\n\n{body}".strip()
    if not body:
        body = f"Instructions converted from the {agent.name} agent."
    return body


def convert_command_to_skill(
    command: ClaudeCommand,
    registry: NameRegistry,
    known_agents: Sequence[str],
    dialect: Dialect,
) -> GeneratedSkill:
    name = unique_name(normalize_name(command.name, dialect.max_name_length), registry)
    description = sanitize_description(
        command.description or f"Converted from Claude command {command.name}",
        dialect.max_description_length,
    )

    body = transform_content(command.body.strip(), known_agents, dialect)
    if not body:
        body = f"Instructions converted from the {command.name} command."

    content = format_frontmatter({"name": name, "description": description}, body)
    return GeneratedSkill(name=name, content=content)


def convert_mcp_servers(
    servers: Optional[Dict[str, ClaudeMcpServer]],
    target_label: str,
    warnings: List[str],
) -> Dict[str, McpServer]:
    """Keep stdio servers only; network transports are dropped with a warning."""
    if not servers:
        return {}

    result: Dict[str, McpServer] = {}
    for name, server in servers.items():
        if not server.command:
            warn(
                warnings,
                f'MCP server "{name}" has no command (HTTP/SSE transport). '
                f"{target_label} only supports stdio. Skipping.",
            )
            continue

        entry = McpServer(
            command=server.command,
            args=list(server.args) if server.args else None,
            env=dict(server.env) if server.env else None,
        )
        logger.info(
            'MCP server "%s" will execute: %s',
            name,
            " ".join([server.command, *(server.args or [])]),
        )
        result[name] = entry
    return result


def build_steering_files(
    plugin: ClaudePlugin,
    known_agents: Sequence[str],
    dialect: Dialect,
    options: ConvertOptions,
) -> List[SteeringFile]:
    """The root instruction document becomes exactly one steering file."""
    content = plugin.instructions
    if not content or not content.strip():
        return []

    name = normalize_name(options.steering_name or plugin.display_name, dialect.max_name_length)
    return [SteeringFile(name=name, content=transform_content(content, known_agents, dialect))]


def has_hooks(plugin: ClaudePlugin) -> bool:
    return bool(plugin.hooks)
