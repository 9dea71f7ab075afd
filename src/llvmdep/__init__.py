"""
LLVM dependency resolution

Decides, from a detected LLVM installation and user overrides, which backend
targets are enabled and which libraries, definitions and flags a dependent
build has to use.
"""

__version__ = "0.1.0"

from .errors import ResolutionError, VersionTooLowError, RTTIConflictError, UnresolvableComponentError, ConfigError
from .diagnostics import Diagnostic, DiagnosticCode, Severity
from .version import PackageVersion, check_version
from .descriptor import ExternalPackageDescriptor, load_descriptor
from .target import (
    CapabilityEntry, CapabilityRule, Override, KNOWN_TARGETS, VERSION_FLOORS, detect,
    resolve_options, LibraryLocator, FilesystemLocator, StaticLocator, try_link,
)
from .libraries import LinkMode, ComponentLibraryMap, build_library_set
from .language import ToolchainFamily, toggle_language_features
from .resolver import ResolutionOptions, ResolvedConfiguration, resolve
from .config import ResolverConfig, load_options

__all__ = [
    "ResolutionError", "VersionTooLowError", "RTTIConflictError", "UnresolvableComponentError", "ConfigError",
    "Diagnostic", "DiagnosticCode", "Severity",
    "PackageVersion", "check_version",
    "ExternalPackageDescriptor", "load_descriptor",
    "CapabilityEntry", "CapabilityRule", "Override", "KNOWN_TARGETS", "VERSION_FLOORS", "detect",
    "resolve_options", "LibraryLocator", "FilesystemLocator", "StaticLocator", "try_link",
    "LinkMode", "ComponentLibraryMap", "build_library_set",
    "ToolchainFamily", "toggle_language_features",
    "ResolutionOptions", "ResolvedConfiguration", "resolve",
    "ResolverConfig", "load_options",
]
