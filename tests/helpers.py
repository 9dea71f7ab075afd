'''Shared fixtures for the resolver tests'''

from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from llvmdep import ExternalPackageDescriptor, PackageVersion

ALL_TARGETS = ('AArch64', 'AMDGPU', 'ARM', 'Hexagon', 'Mips', 'NVPTX', 'PowerPC', 'RISCV', 'WebAssembly', 'X86')

LIBRARIES = (
    'LLVMMCJIT', 'LLVMBitWriter', 'LLVMLinker', 'LLVMPasses', 'LLVMLTO', 'LLVMOption',
) + tuple(f'LLVM{name}CodeGen' for name in ALL_TARGETS)


def make_descriptor(version=(12, 0), **kwargs) -> ExternalPackageDescriptor:
    '''Descriptor for an LLVM with every known target built'''
    values = dict(
        version=PackageVersion.parse(version),
        include_dirs=('/opt/llvm/include',),
        library_dirs=('/opt/llvm/lib',),
        targets=ALL_TARGETS,
        enable_rtti=True,
        libraries=LIBRARIES,
    )
    values.update(kwargs)
    return ExternalPackageDescriptor(**values)
