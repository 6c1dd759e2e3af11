"""
Kiro bundle writer.

Output structure:
- .kiro/agents/<name>.json (agent configuration)
- .kiro/agents/prompts/<name>.md (agent prompt)
- .kiro/skills/<skill-name>/SKILL.md
- .kiro/steering/<name>.md
- .kiro/settings/mcp.json (merged, never replaced)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from plugin_bridge.converters.kiro import KiroBundle
from plugin_bridge.utils import (
    copy_dir,
    merge_mcp_config,
    validate_path_safe,
    validate_path_within_project,
    write_json,
    write_text,
)

logger = logging.getLogger(__name__)

KIRO_DIR_NAME = ".kiro"


@dataclass(frozen=True)
class KiroPaths:
    kiro_dir: Path
    agents_dir: Path
    skills_dir: Path
    steering_dir: Path
    settings_dir: Path


def resolve_kiro_paths(output_root: Path) -> KiroPaths:
    """Write into output_root if it already is .kiro/, otherwise nest under it."""
    output_root = Path(output_root)
    kiro_dir = output_root if output_root.name == KIRO_DIR_NAME else output_root / KIRO_DIR_NAME
    return KiroPaths(
        kiro_dir=kiro_dir,
        agents_dir=kiro_dir / "agents",
        skills_dir=kiro_dir / "skills",
        steering_dir=kiro_dir / "steering",
        settings_dir=kiro_dir / "settings",
    )


def validate_kiro_bundle(bundle: KiroBundle) -> None:
    """Raise UnsafePathError for the first identifier unusable as a path segment."""
    for agent in bundle.agents:
        validate_path_safe(agent.name, "agent")
    for skill in bundle.generated_skills:
        validate_path_safe(skill.name, "skill")
    for skill_dir in bundle.skill_dirs:
        validate_path_safe(skill_dir.name, "skill directory")
    for steering in bundle.steering_files:
        validate_path_safe(steering.name, "steering file")


def _text(content: str) -> str:
    return content.rstrip("\n") + "\n"


def write_kiro_bundle(output_root: Path, bundle: KiroBundle) -> List[str]:
    """
    Persist a KiroBundle under output_root.

    Raises UnsafePathError before anything is written if any identifier
    contains a traversal or separator token. Returns non-fatal warnings.
    """
    validate_kiro_bundle(bundle)

    warnings: List[str] = []
    paths = resolve_kiro_paths(output_root)
    paths.kiro_dir.mkdir(parents=True, exist_ok=True)

    for agent in bundle.agents:
        write_json(paths.agents_dir / f"{agent.name}.json", agent.config)
        write_text(paths.agents_dir / "prompts" / f"{agent.name}.md", _text(agent.prompt_content))
        logger.debug("Wrote agent %s", agent.name)

    for skill in bundle.generated_skills:
        write_text(paths.skills_dir / skill.name / "SKILL.md", _text(skill.content))
        logger.debug("Wrote skill %s", skill.name)

    for skill_dir in bundle.skill_dirs:
        dest_dir = paths.skills_dir / skill_dir.name
        if not validate_path_within_project(dest_dir, paths.skills_dir):
            message = f'Skill name "{skill_dir.name}" escapes {KIRO_DIR_NAME}/skills/. Skipping.'
            logger.warning(message)
            warnings.append(message)
            continue
        copy_dir(skill_dir.source_dir, dest_dir)
        logger.debug("Copied skill directory %s", skill_dir.name)

    for steering in bundle.steering_files:
        write_text(paths.steering_dir / f"{steering.name}.md", _text(steering.content))
        logger.debug("Wrote steering file %s", steering.name)

    if bundle.mcp_servers:
        servers = {name: server.to_dict() for name, server in bundle.mcp_servers.items()}
        warnings.extend(merge_mcp_config(paths.settings_dir / "mcp.json", servers, "mcpServers"))

    return warnings
