'''
External package descriptor

The detected facts about an installed LLVM: version, paths, the targets it was
built with and the build modes that dependents have to match. Descriptor files
are read from YAML or JSON5 files; producing them is left to the caller.
'''

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import json5
import yaml

from .common import parse_bool, split_list
from .errors import ConfigError
from .version import PackageVersion


@dataclass(frozen=True)
class ExternalPackageDescriptor:
    '''Immutable descriptor for the external toolchain package'''
    version: PackageVersion
    name: str = 'LLVM'
    include_dirs: Tuple[str, ...] = ()
    library_dirs: Tuple[str, ...] = ()
    definitions: Tuple[str, ...] = ()
    targets: Tuple[str, ...] = ()
    enable_rtti: bool = False
    stdlib_variant: Optional[str] = None
    use_shared_library: bool = False
    libraries: Tuple[str, ...] = ()
    component_libraries: Tuple[Tuple[str, str], ...] = ()
    tools: Tuple[Tuple[str, str], ...] = ()

    def has_target(self, name: str) -> bool:
        return name in self.targets

    @property
    def component_library_map(self) -> Dict[str, str]:
        return dict(self.component_libraries)

    @property
    def tool_map(self) -> Dict[str, str]:
        return dict(self.tools)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ExternalPackageDescriptor':
        '''Build a descriptor from a parsed mapping'''
        if 'version' not in data:
            raise ConfigError('package descriptor has no "version"')

        try:
            version = PackageVersion.parse(data['version'])
        except ValueError as e:
            raise ConfigError(f'package descriptor: {e}') from e

        return cls(
            version=version,
            name=str(data.get('name', 'LLVM')),
            include_dirs=tuple(split_list(data.get('include_dirs'))),
            library_dirs=tuple(split_list(data.get('library_dirs'))),
            definitions=tuple(_normalize_definition(d) for d in split_list(data.get('definitions'))),
            targets=tuple(split_list(data.get('targets'))),
            enable_rtti=parse_bool(data.get('enable_rtti', False), 'enable_rtti'),
            stdlib_variant=str(data['stdlib']) if data.get('stdlib') else None,
            use_shared_library=parse_bool(data.get('use_shared_library', False), 'use_shared_library'),
            libraries=tuple(split_list(data.get('libraries'))),
            component_libraries=_string_pairs(data, 'component_libraries'),
            tools=_string_pairs(data, 'tools'),
        )


def _string_pairs(data: Mapping[str, Any], key: str) -> Tuple[Tuple[str, str], ...]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f'package descriptor: "{key}" must be a mapping, got {value!r}')
    return tuple((str(k), str(v)) for k, v in value.items())


def _normalize_definition(definition: str) -> str:
    '''"-DFOO=1" as reported by llvm-config becomes "FOO=1"'''
    if definition.startswith('-D') or definition.startswith('/D'):
        return definition[2:]
    return definition


def load_descriptor(path) -> ExternalPackageDescriptor:
    '''Load a package descriptor from a .yaml/.yml or JSON5 file'''
    path = Path(path)
    if not path.exists():
        raise ConfigError(f'package descriptor not found: {path}')

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    try:
        if path.suffix.lower() in ('.yaml', '.yml'):
            data = yaml.safe_load(content)
        else:
            data = json5.loads(content)

    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f'failed to parse package descriptor {path}: {e}') from e

    if not isinstance(data, dict):
        raise ConfigError(f'package descriptor {path} must contain a mapping')

    return ExternalPackageDescriptor.from_dict(data)
