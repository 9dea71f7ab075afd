'''
Language options: RTTI, exceptions and the C++ runtime library

A dependent has to agree with LLVM on RTTI: it can turn RTTI off on top of an
RTTI-enabled LLVM, but can't turn it on when LLVM was built without it.
'''

import logging
from dataclasses import dataclass
from enum import auto
from typing import Optional, Tuple

from .common import Enum2
from .errors import RTTIConflictError

logger = logging.getLogger(__name__)

RTTI_DEFINITION = 'WITH_RTTI'
EXCEPTIONS_DEFINITION = 'WITH_EXCEPTIONS'
NO_EXCEPTIONS_DEFINITION = '_HAS_EXCEPTIONS=0'
LIBCXX = 'libc++'


class ToolchainFamily(Enum2):
    GNU = auto()    # GCC, Clang, AppleClang
    MSVC = auto()

    @classmethod
    def parse(cls, value) -> 'ToolchainFamily':
        if isinstance(value, ToolchainFamily):
            return value

        name = str(value).strip().upper()
        if name in ('GNU', 'GCC', 'CLANG', 'APPLECLANG'):
            return cls.GNU
        if name == 'MSVC':
            return cls.MSVC
        raise ValueError(f'Unknown toolchain family: {value!r}')

    @property
    def no_rtti_flags(self) -> Tuple[str, ...]:
        return ('/GR-',) if self is ToolchainFamily.MSVC else ('-fno-rtti',)

    @property
    def no_exceptions_flags(self) -> Tuple[str, ...]:
        return ('/EHs-c-',) if self is ToolchainFamily.MSVC else ('-fno-exceptions',)


@dataclass(frozen=True)
class LanguageFlags:
    rtti: bool
    exceptions: bool
    definitions: Tuple[str, ...] = ()
    compile_flags: Tuple[str, ...] = ()
    link_flags: Tuple[str, ...] = ()


def toggle_language_features(wants_rtti: Optional[bool], package_has_rtti: bool, wants_exceptions: bool = True,
                             stdlib_variant: Optional[str] = None, family=ToolchainFamily.GNU,
                             package_name: str = 'LLVM') -> LanguageFlags:
    '''
    Compute RTTI / exception definitions and flags.

    wants_rtti=None follows the package. Raises RTTIConflictError when RTTI
    is requested but the package was built without it.
    '''
    family = ToolchainFamily.parse(family)
    rtti = package_has_rtti if wants_rtti is None else wants_rtti

    if rtti and not package_has_rtti:
        raise RTTIConflictError(package_name)

    definitions = []
    compile_flags = []
    link_flags = []

    if rtti:
        logger.info('Compiling WITH RTTI.')
        definitions.append(RTTI_DEFINITION)
    else:
        logger.info('Compiling WITHOUT RTTI.')
        compile_flags.extend(family.no_rtti_flags)

    if wants_exceptions:
        logger.info('Compiling WITH exceptions.')
        definitions.append(EXCEPTIONS_DEFINITION)
    else:
        logger.info('Compiling WITHOUT exceptions.')
        compile_flags.extend(family.no_exceptions_flags)
        definitions.append(NO_EXCEPTIONS_DEFINITION)

    if stdlib_variant and stdlib_variant.lower() == LIBCXX:
        logger.info(f'{package_name} linked to libc++. Adding to interface requirements.')
        compile_flags.append('-stdlib=libc++')
        link_flags.append('-stdlib=libc++')

    return LanguageFlags(rtti, bool(wants_exceptions), tuple(definitions), tuple(compile_flags), tuple(link_flags))
