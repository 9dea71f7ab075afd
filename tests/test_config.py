#!/usr/bin/env python3
'''Unit tests for configuration and descriptor loading'''

import tempfile
import unittest
from pathlib import Path

from helpers import *
from llvmdep import ConfigError, PackageVersion, ResolverConfig, ToolchainFamily, load_descriptor, load_options
from llvmdep.common import parse_bool, split_list
from llvmdep.target import Override


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text) -> Path:
        path = self.tmp / name
        path.write_text(text, encoding='utf-8')
        return path


class TestResolverConfig(ConfigTestCase):
    '''Test defaults < file < command line layering'''

    def test_defaults(self):
        options = ResolverConfig().to_options()

        self.assertEqual(options.min_version, PackageVersion(9, 0))
        self.assertEqual(options.soft_max_version, PackageVersion(12, 0))
        self.assertIsNone(options.enable_rtti)
        self.assertTrue(options.enable_exceptions)
        self.assertIs(options.toolchain, ToolchainFamily.GNU)
        self.assertEqual(options.target_overrides, ())

    def test_json5_file(self):
        path = self.write('config.json5', '''
            // comments and trailing commas are fine
            {
              min_version: '10.0',
              enable_rtti: 'OFF',
              toolchain: 'msvc',
              targets: {Hexagon: false, TARGET_WEBASSEMBLY: 'ON',},
            }
        ''')
        options = load_options(path)

        self.assertEqual(options.min_version, PackageVersion(10, 0))
        self.assertFalse(options.enable_rtti)
        self.assertIs(options.toolchain, ToolchainFamily.MSVC)
        self.assertEqual(dict(options.target_overrides), {'HEXAGON': Override.OFF, 'WEBASSEMBLY': Override.ON})

    def test_cli_overrides_file(self):
        path = self.write('config.json5', "{targets: {X86: false, ARM: false}, enable_exceptions: true}")
        options = load_options(path, ['--target', 'X86=ON', '--exceptions', 'NO', '--unrelated'])

        overrides = dict(options.target_overrides)
        self.assertEqual(overrides['X86'], Override.ON)
        self.assertEqual(overrides['ARM'], Override.OFF)
        self.assertFalse(options.enable_exceptions)

    def test_config_argument(self):
        path = self.write('config.json5', "{soft_max_version: '13.0'}")
        options = load_options(args=['--config', str(path), '--search-path', '/opt/lld/lib'])

        self.assertEqual(options.soft_max_version, PackageVersion(13, 0))
        self.assertEqual(options.search_paths, ('/opt/lld/lib',))

    def test_missing_file(self):
        config = ResolverConfig()
        self.assertFalse(config.load_file(self.tmp / 'missing.json5'))
        with self.assertRaises(ConfigError):
            load_options(self.tmp / 'missing.json5')

    def test_malformed_file(self):
        path = self.write('bad.json5', '{min_version: ')
        with self.assertRaises(ConfigError):
            load_options(path)

    def test_targets_must_be_object(self):
        '''A list of targets is rejected with the key named'''
        path = self.write('config.json5', "{targets: ['X86']}")
        with self.assertRaises(ConfigError) as ctx:
            load_options(path)
        self.assertIn('targets', str(ctx.exception))

    def test_unquoted_version(self):
        '''Unquoted 10.10 would lose its minor number'''
        path = self.write('config.json5', '{min_version: 10.10}')
        with self.assertRaises(ConfigError) as ctx:
            load_options(path)
        self.assertIn('quoted', str(ctx.exception))

    def test_bad_target_argument(self):
        with self.assertRaises(ConfigError):
            load_options(args=['--target', 'X86'])
        with self.assertRaises(ConfigError):
            load_options(args=['--target', 'X86=maybe'])

    def test_inverted_range(self):
        with self.assertRaises(ConfigError):
            load_options(args=['--min-version', '13.0'])

    def test_instances_independent(self):
        first = ResolverConfig()
        first.parse_args(['--target', 'X86=OFF'])
        self.assertEqual(ResolverConfig().to_options().target_overrides, ())


class TestLoadDescriptor(ConfigTestCase):
    '''Test package descriptor files'''

    def test_yaml(self):
        path = self.write('llvm.yaml', '''
name: LLVM
version: "11.1.0"
include_dirs: [/usr/lib/llvm-11/include]
library_dirs: /usr/lib/llvm-11/lib
definitions: "-D_GNU_SOURCE -D__STDC_LIMIT_MACROS"
targets: "X86;AArch64;WebAssembly"
enable_rtti: OFF
stdlib: libc++
use_shared_library: YES
libraries: [LLVMCore]
component_libraries: {core: LLVMCore}
tools: {llvm-config: /usr/bin/llvm-config-11}
''')
        descriptor = load_descriptor(path)

        self.assertEqual(descriptor.version, PackageVersion(11, 1))
        self.assertEqual(descriptor.include_dirs, ('/usr/lib/llvm-11/include',))
        self.assertEqual(descriptor.library_dirs, ('/usr/lib/llvm-11/lib',))
        self.assertEqual(descriptor.definitions, ('_GNU_SOURCE', '__STDC_LIMIT_MACROS'))
        self.assertEqual(descriptor.targets, ('X86', 'AArch64', 'WebAssembly'))
        self.assertFalse(descriptor.enable_rtti)
        self.assertEqual(descriptor.stdlib_variant, 'libc++')
        self.assertTrue(descriptor.use_shared_library)
        self.assertEqual(descriptor.component_library_map, {'core': 'LLVMCore'})
        self.assertEqual(descriptor.tool_map, {'llvm-config': '/usr/bin/llvm-config-11'})

    def test_json5(self):
        path = self.write('llvm.json5', "{version: '12.0', targets: ['X86'], enable_rtti: true}")
        descriptor = load_descriptor(path)

        self.assertEqual(descriptor.version, PackageVersion(12, 0))
        self.assertTrue(descriptor.enable_rtti)
        self.assertTrue(descriptor.has_target('X86'))
        self.assertFalse(descriptor.has_target('ARM'))

    def test_missing_version(self):
        path = self.write('llvm.yaml', 'targets: [X86]\n')
        with self.assertRaises(ConfigError):
            load_descriptor(path)

    def test_not_a_mapping(self):
        path = self.write('llvm.yaml', '- 12.0\n')
        with self.assertRaises(ConfigError):
            load_descriptor(path)

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_descriptor(self.tmp / 'nope.yaml')

    def test_mappings_must_be_mappings(self):
        for key in ('tools', 'component_libraries'):
            path = self.write('llvm.yaml', f'version: "12.0"\n{key}: [llvm-config]\n')
            with self.assertRaises(ConfigError) as ctx:
                load_descriptor(path)
            self.assertIn(key, str(ctx.exception))

    def test_unquoted_version(self):
        path = self.write('llvm.yaml', 'version: 11.10\n')
        with self.assertRaises(ConfigError):
            load_descriptor(path)

    def test_quoted_version_keeps_minor(self):
        path = self.write('llvm.yaml', 'version: "11.10"\n')
        self.assertEqual(load_descriptor(path).version, PackageVersion(11, 10))

    def test_example_descriptor(self):
        '''The shipped example resolves as-is'''
        example = Path(__file__).parent.parent / 'examples' / 'llvm12.yaml'
        descriptor = load_descriptor(example)
        self.assertEqual(str(descriptor.version), '12.0.1')
        self.assertIn('WebAssembly', descriptor.targets)


class TestParsing(unittest.TestCase):

    def test_parse_bool(self):
        for value in ('ON', 'yes', 'True', '1', 1, True):
            self.assertTrue(parse_bool(value))
        for value in ('OFF', 'no', 'false', '0', '', 'LLD-NOTFOUND', 0, False):
            self.assertFalse(parse_bool(value))
        with self.assertRaises(ConfigError):
            parse_bool('sometimes')

    def test_split_list(self):
        self.assertEqual(split_list('X86;ARM  Mips'), ['X86', 'ARM', 'Mips'])
        self.assertEqual(split_list(['a', 'b']), ['a', 'b'])
        self.assertEqual(split_list(None), [])


if __name__ == '__main__':
    unittest.main()
