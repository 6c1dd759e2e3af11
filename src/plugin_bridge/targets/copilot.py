"""
GitHub Copilot bundle writer.

Output structure:
- .github/agents/<name>.agent.md
- .github/skills/<skill-name>/SKILL.md
- .github/instructions/<name>.instructions.md
- .vscode/mcp.json (sibling of .github/, merged under "servers")

Reference: https://code.visualstudio.com/docs/copilot/customization/mcp-servers
"""

import logging
from pathlib import Path
from typing import List

from plugin_bridge.converters.copilot import CopilotBundle
from plugin_bridge.utils import (
    copy_dir,
    merge_mcp_config,
    validate_path_safe,
    validate_path_within_project,
    write_text,
)

logger = logging.getLogger(__name__)

GITHUB_DIR_NAME = ".github"


def resolve_github_dir(output_root: Path) -> Path:
    output_root = Path(output_root)
    return output_root if output_root.name == GITHUB_DIR_NAME else output_root / GITHUB_DIR_NAME


def write_copilot_bundle(output_root: Path, bundle: CopilotBundle) -> List[str]:
    """Persist a CopilotBundle; same safety rules as the Kiro writer."""
    for agent in bundle.agents:
        validate_path_safe(agent.name, "agent")
    for skill in bundle.generated_skills:
        validate_path_safe(skill.name, "skill")
    for skill_dir in bundle.skill_dirs:
        validate_path_safe(skill_dir.name, "skill directory")
    for instruction in bundle.instructions:
        validate_path_safe(instruction.name, "instruction file")

    warnings: List[str] = []
    github_dir = resolve_github_dir(output_root)
    skills_dir = github_dir / "skills"
    github_dir.mkdir(parents=True, exist_ok=True)

    for agent in bundle.agents:
        write_text(github_dir / "agents" / f"{agent.name}.agent.md", agent.content.rstrip("\n") + "\n")

    for skill in bundle.generated_skills:
        write_text(skills_dir / skill.name / "SKILL.md", skill.content.rstrip("\n") + "\n")

    for skill_dir in bundle.skill_dirs:
        dest_dir = skills_dir / skill_dir.name
        if not validate_path_within_project(dest_dir, skills_dir):
            message = f'Skill name "{skill_dir.name}" escapes {GITHUB_DIR_NAME}/skills/. Skipping.'
            logger.warning(message)
            warnings.append(message)
            continue
        copy_dir(skill_dir.source_dir, dest_dir)

    for instruction in bundle.instructions:
        write_text(
            github_dir / "instructions" / f"{instruction.name}.instructions.md",
            instruction.content.rstrip("\n") + "\n",
        )

    if bundle.mcp_servers:
        # VS Code reads "servers", not "mcpServers"
        servers = {name: server.to_dict() for name, server in bundle.mcp_servers.items()}
        mcp_path = github_dir.parent / ".vscode" / "mcp.json"
        warnings.extend(merge_mcp_config(mcp_path, servers, "servers"))

    return warnings
