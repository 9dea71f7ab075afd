#!/usr/bin/env python3
'''Unit tests for link library set assembly'''

import unittest

from helpers import *
from llvmdep import ComponentLibraryMap, LinkMode, UnresolvableComponentError, build_library_set


class TestSharedMode(unittest.TestCase):
    '''Single shared libLLVM'''

    def test_single_library(self):
        for requested in (['mcjit'], ['x', 'y', 'x', 'z'], ['unmapped']):
            self.assertEqual(build_library_set(requested, LinkMode.SHARED), ('LLVM',))

    def test_empty_request(self):
        with self.assertRaises(ValueError):
            build_library_set([], LinkMode.SHARED)


class TestComponentMode(unittest.TestCase):
    '''Per-component static libraries'''

    def test_dedup_preserves_order(self):
        resolver = {'x': 'libx', 'y': 'liby', 'z': 'libz'}
        result = build_library_set(['x', 'y', 'x', 'z'], LinkMode.COMPONENTS, resolver)
        self.assertEqual(result, ('libx', 'liby', 'libz'))

    def test_aliases_dedup(self):
        '''Two components mapping to one library yield it once'''
        resolver = {'a': 'libcore', 'b': 'libcore', 'c': 'libc'}
        self.assertEqual(build_library_set(['a', 'b', 'c'], LinkMode.COMPONENTS, resolver), ('libcore', 'libc'))

    def test_unmapped(self):
        with self.assertRaises(UnresolvableComponentError) as ctx:
            build_library_set(['x', 'w'], LinkMode.COMPONENTS, {'x': 'libx'})
        self.assertEqual(ctx.exception.component, 'w')
        self.assertEqual(ctx.exception.code, 'UnresolvableComponent')

    def test_callable_resolver(self):
        result = build_library_set(['a'], LinkMode.COMPONENTS, lambda name: f'lib{name}')
        self.assertEqual(result, ('liba',))

    def test_for_shared(self):
        self.assertIs(LinkMode.for_shared(True), LinkMode.SHARED)
        self.assertIs(LinkMode.for_shared(False), LinkMode.COMPONENTS)


class TestComponentLibraryMap(unittest.TestCase):
    '''Component name -> LLVM library lookup'''

    def setUp(self):
        self.map = ComponentLibraryMap.from_descriptor(make_descriptor())

    def test_targets_map_to_codegen(self):
        self.assertEqual(self.map('X86'), 'LLVMX86CodeGen')
        self.assertEqual(self.map('WebAssembly'), 'LLVMWebAssemblyCodeGen')

    def test_case_insensitive(self):
        self.assertEqual(self.map('mcjit'), 'LLVMMCJIT')
        self.assertEqual(self.map('bitwriter'), 'LLVMBitWriter')
        self.assertEqual(self.map('lto'), 'LLVMLTO')

    def test_missing(self):
        self.assertIsNone(self.map('orcjit'))

    def test_explicit_wins(self):
        lookup = ComponentLibraryMap(['LLVMX86CodeGen'], {'X86': 'LLVMX86Desc'})
        self.assertEqual(lookup('x86'), 'LLVMX86Desc')

    def test_error_lists_known(self):
        lookup = ComponentLibraryMap(['LLVMCore'])
        with self.assertRaises(UnresolvableComponentError) as ctx:
            build_library_set(['orcjit'], LinkMode.COMPONENTS, lookup)
        self.assertIn('LLVMCore', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
