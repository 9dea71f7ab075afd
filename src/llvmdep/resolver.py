'''
Resolution pipeline

    descriptor + options
        -> version gate
        -> capability detection
        -> override resolution
        -> wasm lld linkage
        -> library set
      (+ language options)
        -> ResolvedConfiguration

A run is a pure function of its inputs: no module state is read or written,
and the same inputs give an equal result, diagnostics included.
'''

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .common import unique
from .descriptor import ExternalPackageDescriptor
from .diagnostics import Diagnostic
from .language import ToolchainFamily, toggle_language_features
from .libraries import ComponentLibraryMap, LinkMode, NameResolver, build_library_set
from .target.capability import KNOWN_TARGETS, VERSION_FLOORS, CapabilityRule, Override, detect
from .target.options import normalize_overrides, resolve_options
from .target.wasm import FilesystemLocator, LibraryLocator, try_link
from .version import PackageVersion, check_version

logger = logging.getLogger(__name__)

BASE_COMPONENTS = ('mcjit', 'bitwriter', 'linker', 'passes')
PROMOTED_TOOLS = ('llvm-as', 'llvm-nm', 'llvm-config')


@dataclass(frozen=True)
class ResolutionOptions:
    '''User side of a resolution run'''
    min_version: PackageVersion = PackageVersion(9, 0)
    soft_max_version: PackageVersion = PackageVersion(12, 0)
    target_overrides: Tuple[Tuple[str, Override], ...] = ()
    enable_rtti: Optional[bool] = None
    enable_exceptions: bool = True
    toolchain: ToolchainFamily = ToolchainFamily.GNU
    use_shared_library: Optional[bool] = None
    search_paths: Tuple[str, ...] = ()
    known_targets: Tuple[str, ...] = KNOWN_TARGETS
    version_floors: Tuple[Tuple[str, PackageVersion], ...] = tuple(VERSION_FLOORS.items())
    base_components: Tuple[str, ...] = BASE_COMPONENTS

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, Any], **kwargs) -> 'ResolutionOptions':
        '''Build options from a {target: bool/None} override mapping'''
        return cls(target_overrides=tuple(normalize_overrides(overrides).items()), **kwargs)


@dataclass(frozen=True)
class ResolvedConfiguration:
    '''Everything the surrounding build needs; built once, never mutated'''
    version: PackageVersion
    enabled_capabilities: Tuple[str, ...]
    components: Tuple[str, ...]
    libraries: Tuple[str, ...]
    definitions: Tuple[str, ...]
    compile_flags: Tuple[str, ...]
    link_flags: Tuple[str, ...]
    include_dirs: Tuple[str, ...] = ()
    tools: Tuple[Tuple[str, str], ...] = ()
    rtti: bool = False
    exceptions: bool = True
    link_mode: LinkMode = LinkMode.COMPONENTS
    diagnostics: Tuple[Diagnostic, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': str(self.version),
            'enabled_capabilities': list(self.enabled_capabilities),
            'components': list(self.components),
            'libraries': list(self.libraries),
            'definitions': list(self.definitions),
            'compile_flags': list(self.compile_flags),
            'link_flags': list(self.link_flags),
            'include_dirs': list(self.include_dirs),
            'tools': dict(self.tools),
            'rtti': self.rtti,
            'exceptions': self.exceptions,
            'link_mode': str(self.link_mode),
            'diagnostics': [d.to_dict() for d in self.diagnostics],
        }


def resolve(descriptor: ExternalPackageDescriptor, options: Optional[ResolutionOptions] = None,
            locator: Optional[LibraryLocator] = None, name_resolver: Optional[NameResolver] = None,
            rules: Optional[Mapping[str, CapabilityRule]] = None) -> ResolvedConfiguration:
    '''
    Resolve the build configuration for an installed LLVM.

    Raises a ResolutionError subclass on any fatal condition; warnings are
    returned in ResolvedConfiguration.diagnostics.
    '''
    if options is None:
        options = ResolutionOptions()
    if locator is None:
        locator = FilesystemLocator()
    if name_resolver is None:
        name_resolver = ComponentLibraryMap.from_descriptor(descriptor)

    version = descriptor.version
    logger.info(f'Found {descriptor.name} {version}')

    diagnostics = []

    gate = check_version(version, options.min_version, options.soft_max_version)
    diagnostics.extend(gate.diagnostics)

    entries = detect(options.known_targets, descriptor, dict(options.version_floors))
    selected = resolve_options(entries, dict(options.target_overrides), rules)

    search_paths = tuple(descriptor.library_dirs) + tuple(options.search_paths)
    wasm = try_link(selected.enabled, locator, search_paths, version)
    diagnostics.extend(wasm.diagnostics)

    components = tuple(unique(options.base_components + selected.requested_components + wasm.extra_components))

    use_shared = descriptor.use_shared_library if options.use_shared_library is None else options.use_shared_library
    mode = LinkMode.for_shared(use_shared)
    libraries = build_library_set(components, mode, name_resolver)
    libraries = tuple(unique(libraries + wasm.extra_libraries))

    language = toggle_language_features(
        options.enable_rtti,
        descriptor.enable_rtti,
        options.enable_exceptions,
        descriptor.stdlib_variant,
        options.toolchain,
        descriptor.name,
    )

    definitions = (
        (f'{descriptor.name.upper()}_VERSION={version.compact}',)
        + descriptor.definitions
        + selected.definitions
        + language.definitions
    )

    tool_map = descriptor.tool_map
    tools = tuple((name, tool_map[name]) for name in PROMOTED_TOOLS if name in tool_map)

    for diagnostic in diagnostics:
        logger.warning(str(diagnostic))

    return ResolvedConfiguration(
        version=version,
        enabled_capabilities=selected.enabled,
        components=components,
        libraries=libraries,
        definitions=tuple(unique(definitions)),
        compile_flags=language.compile_flags,
        link_flags=language.link_flags,
        include_dirs=descriptor.include_dirs,
        tools=tools,
        rtti=language.rtti,
        exceptions=language.exceptions,
        link_mode=mode,
        diagnostics=tuple(diagnostics),
    )
