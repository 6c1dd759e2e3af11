"""
Kiro CLI converter.
Converts a Claude Code plugin into a KiroBundle.

Bundle -> output structure (see targets/kiro.py):
- agents          -> .kiro/agents/<name>.json + .kiro/agents/prompts/<name>.md
- generated_skills -> .kiro/skills/<name>/SKILL.md (from commands)
- skill_dirs      -> .kiro/skills/<name>/ (pass-through copy)
- steering_files  -> .kiro/steering/<name>.md (from CLAUDE.md)
- mcp_servers     -> .kiro/settings/mcp.json (stdio only)

Reference: https://kiro.dev/docs/cli/custom-agents/configuration-reference/
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from plugin_bridge.converters.base import (
    GeneratedSkill,
    McpServer,
    SkillDir,
    SteeringFile,
    agent_description,
    agent_prompt_body,
    build_steering_files,
    convert_command_to_skill,
    convert_mcp_servers,
    has_hooks,
    known_agent_names,
    reserve_skill_dirs,
    warn,
)
from plugin_bridge.core.naming import NameRegistry
from plugin_bridge.core.transform import KIRO_DIALECT
from plugin_bridge.core.types import ClaudeAgent, ClaudePlugin, ConversionResult, ConvertOptions

KIRO_AGENT_RESOURCES = [
    "file://.kiro/steering/**/*.md",
    "skill://.kiro/skills/**/SKILL.md",
]


@dataclass(frozen=True)
class KiroAgent:
    name: str
    config: Dict[str, Any]
    prompt_content: str


@dataclass(frozen=True)
class KiroBundle:
    agents: Tuple[KiroAgent, ...] = ()
    generated_skills: Tuple[GeneratedSkill, ...] = ()
    skill_dirs: Tuple[SkillDir, ...] = ()
    steering_files: Tuple[SteeringFile, ...] = ()
    mcp_servers: Dict[str, McpServer] = field(default_factory=dict)


def convert_agent_to_kiro(agent: ClaudeAgent, name: str, known_agents: Sequence[str]) -> KiroAgent:
    description = agent_description(agent, KIRO_DIALECT)

    config: Dict[str, Any] = {
        "name": name,
        "description": description,
        "prompt": f"file://./prompts/{name}.md",
        "tools": ["*"],
        "resources": list(KIRO_AGENT_RESOURCES),
        "includeMcpJson": True,
        "welcomeMessage": f"Switching to the {name} agent. {description}",
    }

    return KiroAgent(
        name=name,
        config=config,
        prompt_content=agent_prompt_body(agent, known_agents, KIRO_DIALECT),
    )


def convert_claude_to_kiro(
    plugin: ClaudePlugin,
    options: Optional[ConvertOptions] = None,
) -> ConversionResult[KiroBundle]:
    """Map a Claude plugin onto Kiro's agents, skills, steering and MCP settings."""
    options = options or ConvertOptions()
    warnings: List[str] = []
    used_skill_names = NameRegistry()

    skill_dirs = reserve_skill_dirs(plugin, used_skill_names, KIRO_DIALECT)

    agent_names = known_agent_names(plugin, KIRO_DIALECT)
    agents = [
        convert_agent_to_kiro(agent, name, agent_names)
        for agent, name in zip(plugin.agents, agent_names)
    ]

    generated_skills = [
        convert_command_to_skill(command, used_skill_names, agent_names, KIRO_DIALECT)
        for command in plugin.commands
    ]

    mcp_servers = convert_mcp_servers(plugin.mcp_servers, "Kiro", warnings)

    steering_files = build_steering_files(plugin, agent_names, KIRO_DIALECT, options)

    if has_hooks(plugin):
        warn(
            warnings,
            "Kiro CLI hooks use a different format (preToolUse/postToolUse inside agent "
            "configs). Hooks were skipped during conversion.",
        )

    bundle = KiroBundle(
        agents=tuple(agents),
        generated_skills=tuple(generated_skills),
        skill_dirs=tuple(skill_dirs),
        steering_files=tuple(steering_files),
        mcp_servers=mcp_servers,
    )
    return ConversionResult(bundle=bundle, warnings=tuple(warnings))
