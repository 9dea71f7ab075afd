'''
Link library set assembly

Turns requested LLVM component names into the libraries a dependent links.
With a shared LLVM the answer is always the single libLLVM; otherwise every
component maps to its static library, the way llvm_map_components_to_libnames
does it.
'''

import logging
from enum import auto
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .common import Enum2, unique
from .errors import UnresolvableComponentError

logger = logging.getLogger(__name__)

SHARED_LIBRARY = 'LLVM'

NameResolver = Union[Callable[[str], Optional[str]], Mapping[str, str]]


class LinkMode(Enum2):
    SHARED = auto()
    COMPONENTS = auto()

    @classmethod
    def for_shared(cls, use_shared: bool) -> 'LinkMode':
        return cls.SHARED if use_shared else cls.COMPONENTS


class ComponentLibraryMap:
    '''
    Component name -> library name lookup over an installed LLVM.

    Explicit mappings win. Otherwise "X86" resolves to LLVMX86CodeGen and
    "bitwriter" to LLVMBitWriter, matched case-insensitively against the
    libraries the package reports.
    '''

    def __init__(self, libraries: Iterable[str] = (), explicit: Optional[Mapping[str, str]] = None):
        self.explicit: Dict[str, str] = {k.lower(): v for k, v in (explicit or {}).items()}
        self._by_lower: Dict[str, str] = {}
        for library in libraries:
            self._by_lower.setdefault(library.lower(), library)

    @classmethod
    def from_descriptor(cls, descriptor) -> 'ComponentLibraryMap':
        return cls(descriptor.libraries, descriptor.component_library_map)

    def candidates(self, component: str) -> List[str]:
        return [f'llvm{component}codegen', f'llvm{component}']

    def __call__(self, component: str) -> Optional[str]:
        key = component.lower()
        if key in self.explicit:
            return self.explicit[key]

        for candidate in self.candidates(key):
            library = self._by_lower.get(candidate)
            if library is not None:
                return library

        return None

    @property
    def known(self) -> List[str]:
        return sorted(set(self.explicit.values()) | set(self._by_lower.values()))


def _as_callable(name_resolver: NameResolver) -> Callable[[str], Optional[str]]:
    if isinstance(name_resolver, Mapping):
        return name_resolver.get
    return name_resolver


def build_library_set(requested: Sequence[str], mode: LinkMode, name_resolver: Optional[NameResolver] = None) -> Tuple[str, ...]:
    '''Ordered, duplicate-free library list for the requested components'''
    if not requested:
        raise ValueError('No LLVM components requested')

    if mode is LinkMode.SHARED:
        return (SHARED_LIBRARY,)

    if name_resolver is None:
        raise ValueError('Component link mode needs a name resolver')

    lookup = _as_callable(name_resolver)
    libraries = []
    for component in requested:
        library = lookup(component)
        if not library:
            raise UnresolvableComponentError(component, getattr(name_resolver, 'known', ()))
        libraries.append(library)

    libraries = unique(libraries)
    logger.debug(f'Mapped {len(requested)} components to {len(libraries)} libraries')
    return tuple(libraries)
