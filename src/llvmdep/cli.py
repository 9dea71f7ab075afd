#!/usr/bin/env python3
"""
llvmdep command line interface

Resolves an LLVM package descriptor into the definitions, flags and libraries a
dependent build should use.
"""

import argparse
import json
import logging
import sys

from .config import ResolverConfig
from .descriptor import load_descriptor
from .errors import ConfigError, ResolutionError
from .resolver import ResolvedConfiguration, resolve
from .target.capability import KNOWN_TARGETS, VERSION_FLOORS, get_capability_rule

logger = logging.getLogger("llvmdep")


def setup_logging(verbose: bool):
    """Configure root logging for command line use"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def format_text(config: ResolvedConfiguration) -> str:
    lines = [
        f"LLVM version:     {config.version}",
        f"Targets:          {' '.join(config.enabled_capabilities) or '(none)'}",
        f"Components:       {' '.join(config.components)}",
        f"Link mode:        {config.link_mode}",
        f"Libraries:        {' '.join(config.libraries)}",
        f"Definitions:      {' '.join(config.definitions)}",
        f"Compile flags:    {' '.join(config.compile_flags)}",
        f"Link flags:       {' '.join(config.link_flags)}",
        f"Include dirs:     {' '.join(config.include_dirs)}",
    ]
    for name, path in config.tools:
        lines.append(f"Tool {name + ':':<12}{path}")
    for diagnostic in config.diagnostics:
        lines.append(f"⚠️  {diagnostic}")
    return "\n".join(lines)


def format_cmake(config: ResolvedConfiguration) -> str:
    """Render as a CMake script for include()"""
    def cmake_list(values):
        return ";".join(str(v) for v in values)

    lines = [
        f'set(LLVM_PACKAGE_VERSION "{config.version}")',
        f'set(LLVM_COMPONENTS "{cmake_list(config.components)}")',
        f'set(LLVM_LIBNAMES "{cmake_list(config.libraries)}")',
        f'set(LLVM_DEPENDENT_DEFINITIONS "{cmake_list(config.definitions)}")',
        f'set(LLVM_DEPENDENT_COMPILE_OPTIONS "{cmake_list(config.compile_flags)}")',
        f'set(LLVM_DEPENDENT_LINK_OPTIONS "{cmake_list(config.link_flags)}")',
        f'set(LLVM_INCLUDE_DIRS "{cmake_list(config.include_dirs)}")',
    ]
    for name in config.enabled_capabilities:
        lines.append(f"set({get_capability_rule(name).option} ON)")
    return "\n".join(lines)


FORMATTERS = {
    "text": format_text,
    "json": lambda config: json.dumps(config.to_dict(), indent=2),
    "cmake": format_cmake,
}


def run_resolve(args) -> int:
    """Resolve a package descriptor and print the configuration"""
    try:
        config = ResolverConfig()
        config.apply_args(args)
        options = config.to_options()
        descriptor = load_descriptor(args.descriptor)
        resolved = resolve(descriptor, options)

    except ConfigError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        return 1

    except ResolutionError as e:
        logger.error(f"❌ {e}")
        return 1

    print(FORMATTERS[args.format](resolved))
    return 0


def list_targets() -> int:
    """List the known backend targets"""
    print("Known targets:")
    for name in KNOWN_TARGETS:
        floor = VERSION_FLOORS.get(name)
        suffix = f" (LLVM {floor}+)" if floor is not None else ""
        print(f"  • {name}{suffix}")
    return 0


def show_info() -> int:
    """Show package information"""
    from . import __version__

    print("llvmdep - LLVM dependency resolution")
    print("=" * 50)
    print(f"Version: {__version__}")

    print("\nComponents:")
    print("  • Version gate")
    print("  • Target detection and overrides")
    print("  • WebAssembly lld linkage")
    print("  • Link library set")
    print("  • RTTI / exceptions / libc++ options")

    print("\nCommands:")
    print("  • resolve - resolve a package descriptor")
    print("  • targets - list known targets")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llvmdep",
        description="Resolve LLVM targets, libraries and language flags for a dependent build",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a package descriptor")
    resolve_parser.add_argument("descriptor", help="Package descriptor file (.yaml/.yml or JSON5)")
    resolve_parser.add_argument("--format", choices=sorted(FORMATTERS), default="text", help="Output format")
    ResolverConfig.add_arguments(resolve_parser)

    # targets
    subparsers.add_parser("targets", help="List known targets")

    # info
    subparsers.add_parser("info", help="Show package information")

    return parser


def main(argv=None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "resolve":
        return run_resolve(args)
    elif args.command == "targets":
        return list_targets()
    else:
        return show_info()


if __name__ == "__main__":
    sys.exit(main())
