"""
GitHub Copilot converter.
Converts a Claude Code plugin into a CopilotBundle.

Bundle -> output structure (see targets/copilot.py):
- agents           -> .github/agents/<name>.agent.md (YAML frontmatter + prompt)
- generated_skills -> .github/skills/<name>/SKILL.md
- skill_dirs       -> .github/skills/<name>/ (pass-through copy)
- instructions     -> .github/instructions/<name>.instructions.md
- mcp_servers      -> .vscode/mcp.json ("servers" key)

Reference: https://docs.github.com/en/copilot/reference/custom-agents-configuration
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

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
from plugin_bridge.core.transform import COPILOT_DIALECT
from plugin_bridge.core.types import ClaudeAgent, ClaudePlugin, ConversionResult, ConvertOptions
from plugin_bridge.utils import format_frontmatter

# Copilot limit: prompt (body after frontmatter) max 30,000 characters
COPILOT_PROMPT_MAX_CHARS = 30000
COPILOT_TRUNCATE_SUFFIX = "\n\n... (truncated to fit Copilot 30K char limit)"

COPILOT_AGENT_TOOLS = ["read", "edit", "search", "execute", "web/fetch", "agent"]


@dataclass(frozen=True)
class CopilotAgent:
    name: str
    content: str


@dataclass(frozen=True)
class CopilotBundle:
    agents: Tuple[CopilotAgent, ...] = ()
    generated_skills: Tuple[GeneratedSkill, ...] = ()
    skill_dirs: Tuple[SkillDir, ...] = ()
    instructions: Tuple[SteeringFile, ...] = ()
    mcp_servers: Dict[str, McpServer] = field(default_factory=dict)


def convert_agent_to_copilot(
    agent: ClaudeAgent,
    name: str,
    known_agents: Sequence[str],
    warnings: List[str],
) -> CopilotAgent:
    body = agent_prompt_body(agent, known_agents, COPILOT_DIALECT)
    if len(body) > COPILOT_PROMPT_MAX_CHARS:
        body = body[: COPILOT_PROMPT_MAX_CHARS - len(COPILOT_TRUNCATE_SUFFIX)] + COPILOT_TRUNCATE_SUFFIX
        warn(warnings, f'Agent "{agent.name}" prompt exceeds {COPILOT_PROMPT_MAX_CHARS} characters and was truncated.')

    frontmatter = {
        "name": name,
        "description": agent_description(agent, COPILOT_DIALECT),
        "tools": list(COPILOT_AGENT_TOOLS),
    }
    return CopilotAgent(name=name, content=format_frontmatter(frontmatter, body))


def convert_claude_to_copilot(
    plugin: ClaudePlugin,
    options: Optional[ConvertOptions] = None,
) -> ConversionResult[CopilotBundle]:
    """Map a Claude plugin onto Copilot custom agents, skills and instructions."""
    options = options or ConvertOptions()
    warnings: List[str] = []
    used_skill_names = NameRegistry()

    skill_dirs = reserve_skill_dirs(plugin, used_skill_names, COPILOT_DIALECT)

    agent_names = known_agent_names(plugin, COPILOT_DIALECT)
    agents = [
        convert_agent_to_copilot(agent, name, agent_names, warnings)
        for agent, name in zip(plugin.agents, agent_names)
    ]

    generated_skills = [
        convert_command_to_skill(command, used_skill_names, agent_names, COPILOT_DIALECT)
        for command in plugin.commands
    ]

    mcp_servers = convert_mcp_servers(plugin.mcp_servers, "Copilot", warnings)

    # Always-on instruction file
    instructions = [
        SteeringFile(name=f.name, content=format_frontmatter({"applyTo": "**"}, f.content))
        for f in build_steering_files(plugin, agent_names, COPILOT_DIALECT, options)
    ]

    if has_hooks(plugin):
        warn(warnings, "GitHub Copilot has no equivalent for Claude Code hooks. Hooks were skipped during conversion.")

    bundle = CopilotBundle(
        agents=tuple(agents),
        generated_skills=tuple(generated_skills),
        skill_dirs=tuple(skill_dirs),
        instructions=tuple(instructions),
        mcp_servers=mcp_servers,
    )
    return ConversionResult(bundle=bundle, warnings=tuple(warnings))
