import json
import logging
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from plugin_bridge.core.errors import UnsafePathError

# Configure module logger
logger = logging.getLogger("plugin_bridge")


# ANSI colors
class Colors:
    HEADER = "\033[95m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    ENDC = "\033[0m"


# =============================================================================
# PATH SAFETY
# =============================================================================


def validate_path_safe(name: str, label: str) -> None:
    """
    Reject identifiers that could escape their parent directory.
    Raises UnsafePathError for '..', '/' or '\\' anywhere in the name.
    """
    if ".." in name or "/" in name or "\\" in name:
        raise UnsafePathError(f"{label} name contains unsafe path characters: {name}")


def validate_path_within_project(path: Path, project_root: Path) -> bool:
    """
    Validate that a path resolves strictly inside project_root.
    Prevents path traversal through symlinks already present on disk.
    """
    try:
        resolved = path.resolve()
        project_resolved = project_root.resolve()
    except (OSError, RuntimeError):
        return False
    return resolved != project_resolved and project_resolved in resolved.parents


# =============================================================================
# FILE UTILITIES
# =============================================================================


def safe_read_text(path: Path, encoding: str = "utf-8") -> Optional[str]:
    """
    Safely read text file with encoding fallback.
    Returns None if file cannot be read.
    """
    for enc in [encoding, "utf-8-sig", "latin-1"]:
        try:
            return path.read_text(encoding=enc)
        except UnicodeDecodeError:
            continue
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None
    logger.warning("Could not decode %s with any known encoding", path)
    return None


def write_text(path: Path, content: str) -> None:
    """Atomically write a text file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{path.stem}-")
    closed = False
    try:
        os.write(fd, content.encode("utf-8"))
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp_path, path)
    except Exception:
        if not closed:
            os.close(fd)
        if Path(tmp_path).exists():
            os.unlink(tmp_path)
        raise


def write_json(path: Path, data: Dict[str, Any]) -> None:
    """Atomically write a JSON file (2-space indent, trailing newline)."""
    write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def read_json(path: Path) -> Any:
    """Read a JSON file. Raises on missing file or invalid JSON."""
    return json.loads(path.read_text(encoding="utf-8"))


def copy_dir(src: Path, dest: Path) -> None:
    """Copy a directory tree, merging into an existing destination."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dest, dirs_exist_ok=True)


def backup_file(path: Path) -> Optional[Path]:
    """
    Copy an existing file to '<name>.bak.<timestamp>' next to it.
    Returns the backup path, or None when there is nothing to back up.
    """
    if not path.is_file():
        return None
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = path.parent / f"{path.name}.bak.{timestamp}"
    shutil.copy2(path, backup_path)
    return backup_path


# =============================================================================
# MCP CONFIGURATION
# =============================================================================


def merge_mcp_config(
    config_path: Path,
    servers: Dict[str, Dict[str, Any]],
    servers_key: str = "mcpServers",
) -> List[str]:
    """
    Merge MCP servers into an existing settings file.

    Existing top-level keys are preserved; the server map is merged key by
    key with the new servers winning on collision. A pre-existing file is
    backed up before it is rewritten.

    Returns warnings produced while reading the existing file.
    """
    warnings: List[str] = []

    backup_path = backup_file(config_path)
    if backup_path:
        logger.info("Backed up existing %s to %s", config_path.name, backup_path)

    existing: Dict[str, Any] = {}
    if config_path.exists():
        try:
            loaded = read_json(config_path)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            loaded = None
            logger.debug("Failed to parse %s: %s", config_path, e)
        if isinstance(loaded, dict):
            existing = loaded
        else:
            message = f"existing {config_path.name} could not be parsed and will be replaced"
            logger.warning(message)
            warnings.append(message)

    current = existing.get(servers_key)
    merged_servers = dict(current) if isinstance(current, dict) else {}
    merged_servers.update(servers)

    merged = dict(existing)
    merged[servers_key] = merged_servers
    write_json(config_path, merged)
    return warnings


# =============================================================================
# CONTENT UTILITIES
# =============================================================================

_RE_FRONTMATTER = re.compile(r"^---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)


def extract_yaml_frontmatter(content: str) -> tuple[Optional[Dict], str]:
    """Extract YAML frontmatter from markdown content."""
    match = _RE_FRONTMATTER.match(content)
    if match:
        try:
            frontmatter = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            logger.debug("Ignoring invalid frontmatter: %s", e)
            return None, content
        body = content[match.end():].lstrip("\r\n")
        if isinstance(frontmatter, dict):
            return frontmatter, body
        return None, body

    return None, content


def format_frontmatter(frontmatter: Dict[str, Any], body: str) -> str:
    """Render frontmatter and body as a markdown document (no trailing newline)."""
    fm_str = yaml.dump(
        frontmatter,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=1000,
    )
    if not body:
        return f"---\n{fm_str}---"
    return f"---\n{fm_str}---\n\n{body}"
