import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import questionary
from questionary import Style

from .core.errors import PluginLoadError, UnsafePathError
from .core.types import ConvertOptions
from .loader import load_plugin
from .targets import TargetHandler, all_targets, get_target, target_names
from .utils import Colors

# Questionary style: no background highlight on the pointer row
CUSTOM_STYLE = Style([
    ('qmark', 'fg:#00d4ff bold'),
    ('question', 'bold'),
    ('answer', 'fg:#00d4ff bold'),
    ('pointer', 'fg:#00d4ff bold'),
    ('highlighted', 'fg:#00d4ff bold bg:default'),
    ('selected', 'fg:#00d4ff bold bg:default'),
    ('checkbox', 'fg:#888888'),
    ('checkbox-selected', 'fg:#00d4ff bold'),
])


def _parse_targets(value: str) -> List[TargetHandler]:
    """Resolve a comma-separated --to value. 'all' selects every target."""
    names = [n.strip() for n in value.split(",") if n.strip()]
    if "all" in (n.lower() for n in names):
        return all_targets()

    handlers = []
    for name in names:
        handler = get_target(name)
        if handler is None:
            raise ValueError(f"Unknown target '{name}'. Supported: {', '.join(target_names())}")
        if handler not in handlers:
            handlers.append(handler)
    return handlers


def _select_targets_interactive() -> Optional[List[TargetHandler]]:
    choices = [
        questionary.Choice(f"{t.display_name} ({t.output_dir}/)", value=t.name)
        for t in all_targets()
    ]
    selected = questionary.checkbox(
        "Select target formats:",
        choices=choices,
        style=CUSTOM_STYLE,
        instruction="Space=toggle, Enter=confirm",
    ).ask()
    if not selected:
        return None
    return [get_target(name) for name in selected]


def _run_target(handler: TargetHandler, plugin, output_root: Path, options: ConvertOptions) -> bool:
    """Convert and write one target. Returns False if the write was aborted."""
    print(f"{Colors.HEADER}🏗️  Converting to {handler.display_name}...{Colors.ENDC}")
    result = handler.convert(plugin, options)

    try:
        write_warnings = handler.write(output_root, result.bundle)
    except UnsafePathError as e:
        print(f"{Colors.RED}❌ {handler.name}: {e}{Colors.ENDC}")
        return False

    warnings = [*result.warnings, *write_warnings]
    if warnings:
        print(f"{Colors.YELLOW}⚠️  Warnings:{Colors.ENDC}")
        for warning in warnings:
            print(f"    - {warning}")

    print(f"{Colors.GREEN}✅ {handler.display_name} bundle written to {output_root}{Colors.ENDC}")
    return True


def _cmd_convert(args: argparse.Namespace) -> int:
    try:
        plugin = load_plugin(Path(args.plugin))
    except PluginLoadError as e:
        print(f"{Colors.RED}❌ Error: {e}{Colors.ENDC}")
        return 1

    if args.to:
        try:
            handlers = _parse_targets(args.to)
        except ValueError as e:
            print(f"{Colors.RED}❌ {e}{Colors.ENDC}")
            return 1
    elif sys.stdin.isatty() and not args.no_interactive:
        handlers = _select_targets_interactive()
        if not handlers:
            print(f"{Colors.YELLOW}No target selected. Use Space to toggle, then Enter.{Colors.ENDC}")
            return 0
    else:
        handlers = all_targets()

    print(
        f"{Colors.CYAN}🔄 {plugin.display_name}: {len(plugin.agents)} agents, "
        f"{len(plugin.commands)} commands, {len(plugin.skills)} skills{Colors.ENDC}\n"
    )

    options = ConvertOptions(steering_name=args.steering_name)
    output_root = Path(args.output)
    ok = True
    for handler in handlers:
        ok = _run_target(handler, plugin, output_root, options) and ok
    return 0 if ok else 1


def _cmd_list(args: argparse.Namespace) -> int:
    print(f"{Colors.BLUE}📂 Supported targets:{Colors.ENDC}")
    for handler in all_targets():
        print(f"  - {Colors.YELLOW}{handler.name}{Colors.ENDC}: {handler.display_name} ({handler.output_dir}/)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugin-bridge",
        description="Plugin Bridge - Convert Claude Code plugins to other assistants",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    convert_parser = subparsers.add_parser("convert", help="Convert a plugin directory")
    convert_parser.add_argument("plugin", help="Path to the Claude Code plugin directory")
    convert_parser.add_argument("--to", default=None, help="Comma-separated targets, or 'all'")
    convert_parser.add_argument("--output", "-o", default=".", help="Output root directory")
    convert_parser.add_argument("--steering-name", default=None, help="Name for the steering/instruction file")
    convert_parser.add_argument("--no-interactive", action="store_true", help="Disable interactive target selection")

    subparsers.add_parser("list", help="List supported targets")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="  %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "convert":
            return _cmd_convert(args)
        if args.command == "list":
            return _cmd_list(args)
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Cancelled.{Colors.ENDC}")
        return 130

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
