'''Resolver configuration supporting JSON5 files and command-line overrides'''

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import json5

from .common import parse_bool, parse_optional_bool, split_list
from .errors import ConfigError
from .language import ToolchainFamily
from .resolver import ResolutionOptions
from .target.capability import Override
from .target.options import normalize_overrides
from .version import PackageVersion

logger = logging.getLogger(__name__)


class ResolverConfig:
    '''
    Layered configuration: defaults < config file < command line.

    Each build configuration run creates its own instance and turns it into
    an immutable ResolutionOptions with to_options().
    '''

    # Default configuration values
    _defaults = {
        'min_version': '9.0',
        'soft_max_version': '12.0',
        'enable_rtti': None,
        'enable_exceptions': True,
        'toolchain': 'gnu',
        'use_shared_library': None,
        'search_paths': [],
        'targets': {},
    }

    def __init__(self):
        self._config: Dict[str, Any] = dict(self._defaults)
        self._config['targets'] = {}
        self._cli_overrides: Dict[str, Any] = {}

    def load_file(self, filepath) -> bool:
        '''Load configuration from JSON5 file'''
        filepath = Path(filepath)
        if not filepath.exists():
            return False

        try:
            with open(filepath, 'r', encoding = 'utf-8') as f:
                data = json5.loads(f.read())

        except ValueError as e:
            raise ConfigError(f'Failed to load config from {filepath}: {e}') from e

        if not isinstance(data, dict):
            raise ConfigError(f'Config file {filepath} must contain an object')

        targets = data.pop('targets', None)
        if targets is not None and not isinstance(targets, dict):
            raise ConfigError(f'Config file {filepath}: "targets" must be an object of NAME: BOOL, got {targets!r}')
        if targets:
            self._config['targets'].update(targets)

        self._config.update(data)
        logger.debug(f'Loaded config from {filepath}')
        return True

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser):
        '''Register the configuration options on a parser'''
        parser.add_argument(
            '--config',
            type = str,
            help = 'Path to JSON5 config file'
        )

        parser.add_argument(
            '--min-version',
            type = str,
            help = 'Oldest supported LLVM version'
        )

        parser.add_argument(
            '--soft-max-version',
            type = str,
            help = 'Newest tested LLVM version'
        )

        parser.add_argument(
            '--target',
            action = 'append',
            default = [],
            metavar = 'NAME=BOOL',
            help = 'Force a target on or off, e.g. --target WebAssembly=OFF'
        )

        parser.add_argument(
            '--rtti',
            type = str,
            help = 'Enable RTTI (default: follow LLVM)'
        )

        parser.add_argument(
            '--exceptions',
            type = str,
            help = 'Enable exceptions (default: ON)'
        )

        parser.add_argument(
            '--toolchain',
            type = str,
            choices = ['gnu', 'msvc'],
            help = 'Compiler family used for flags'
        )

        parser.add_argument(
            '--shared',
            type = str,
            help = 'Link the shared libLLVM (default: follow LLVM)'
        )

        parser.add_argument(
            '--search-path',
            action = 'append',
            default = [],
            help = 'Extra directory searched for lld libraries'
        )

    def parse_args(self, args: Optional[List[str]] = None):
        '''Parse command-line arguments and override config'''
        parser = argparse.ArgumentParser(
            description = 'llvmdep configuration',
            add_help = False
        )
        self.add_arguments(parser)

        # Parse known args, ignore unknown
        parsed, _ = parser.parse_known_args(args)
        self.apply_args(parsed)

    def apply_args(self, parsed: argparse.Namespace):
        '''Apply parsed command-line values on top of file values'''
        # Load config file if specified
        if getattr(parsed, 'config', None):
            if not self.load_file(parsed.config):
                raise ConfigError(f'Config file not found: {parsed.config}')

        for key in ('min_version', 'soft_max_version', 'toolchain'):
            value = getattr(parsed, key, None)
            if value:
                self._cli_overrides[key] = value

        for key, attr in (('enable_rtti', 'rtti'), ('enable_exceptions', 'exceptions'), ('use_shared_library', 'shared')):
            value = getattr(parsed, attr, None)
            if value is not None:
                self._cli_overrides[key] = parse_bool(value, f'--{attr}')

        if getattr(parsed, 'search_path', None):
            self._cli_overrides['search_paths'] = list(parsed.search_path)

        targets = {}
        for item in getattr(parsed, 'target', None) or []:
            name, sep, value = item.partition('=')
            if not sep or not name:
                raise ConfigError(f'--target expects NAME=BOOL, got {item!r}')
            targets[name] = parse_bool(value, f'--target {name}')
        if targets:
            self._cli_overrides['targets'] = targets

    def get(self, key: str, default: Any = None) -> Any:
        '''Get configuration value'''
        # CLI overrides have highest priority
        if key in self._cli_overrides:
            return self._cli_overrides[key]

        # Then config file values
        if key in self._config:
            return self._config[key]

        # Finally default value
        return default

    @property
    def targets(self) -> Dict[str, Override]:
        '''Target overrides; command-line entries win over file entries of the same target'''
        merged = dict(normalize_overrides(self._config.get('targets')))
        merged.update(normalize_overrides(self._cli_overrides.get('targets')))
        return merged

    def to_options(self) -> ResolutionOptions:
        '''Freeze the current values into resolution options'''
        try:
            min_version = PackageVersion.parse(self.get('min_version'))
            soft_max_version = PackageVersion.parse(self.get('soft_max_version'))
            toolchain = ToolchainFamily.parse(self.get('toolchain'))

        except ValueError as e:
            raise ConfigError(str(e)) from e

        if soft_max_version < min_version:
            raise ConfigError(f'soft_max_version {soft_max_version} is below min_version {min_version}')

        return ResolutionOptions(
            min_version = min_version,
            soft_max_version = soft_max_version,
            target_overrides = tuple(self.targets.items()),
            enable_rtti = parse_optional_bool(self.get('enable_rtti'), 'enable_rtti'),
            enable_exceptions = parse_bool(self.get('enable_exceptions'), 'enable_exceptions'),
            toolchain = toolchain,
            use_shared_library = parse_optional_bool(self.get('use_shared_library'), 'use_shared_library'),
            search_paths = tuple(split_list(self.get('search_paths'))),
        )


def load_options(config_file = None, args: Optional[List[str]] = None) -> ResolutionOptions:
    '''Build resolution options from an optional config file and arguments'''
    config = ResolverConfig()
    if config_file is not None and not config.load_file(config_file):
        raise ConfigError(f'Config file not found: {config_file}')
    if args is not None:
        config.parse_args(args)
    return config.to_options()
