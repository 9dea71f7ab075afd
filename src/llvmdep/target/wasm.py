"""
WebAssembly backend support

Generating wasm only needs the LLVM target, but linking it in-process also
needs lld's wasm driver. LLVM doesn't export the lld libraries in its package
config, so they are looked up directly in the library directories. A missing
lld library leaves the target enabled with a warning instead of failing.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from ..diagnostics import Diagnostic, DiagnosticCode, Severity

logger = logging.getLogger(__name__)

WASM_CAPABILITY = "WebAssembly"
WASM_LIBRARIES = ("lldWasm", "lldCommon")
# lto and option aren't needed to generate wasm, but lldWasm depends on them
WASM_COMPONENTS = ("lto", "option")


class LibraryLocator(ABC):
    """Finds a library by name in a list of directories"""

    @abstractmethod
    def locate(self, name: str, search_paths: Sequence[str]) -> Optional[str]:
        """Return a library id (usually a path), or None when not found"""
        raise NotImplementedError


class FilesystemLocator(LibraryLocator):
    """Searches directories for the platform's library file names"""

    PATTERNS = ("lib{name}.a", "lib{name}.so", "lib{name}.dylib", "{name}.lib")

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns = tuple(patterns) if patterns is not None else self.PATTERNS

    def locate(self, name: str, search_paths: Sequence[str]) -> Optional[str]:
        for directory in search_paths:
            for pattern in self.patterns:
                candidate = Path(directory) / pattern.format(name=name)
                if candidate.is_file():
                    return os.fspath(candidate)
        return None


class StaticLocator(LibraryLocator):
    """Answers from a fixed name -> id table, ignoring search paths"""

    def __init__(self, libraries: Optional[Mapping[str, str]] = None):
        self.libraries = dict(libraries or {})

    def locate(self, name: str, search_paths: Sequence[str]) -> Optional[str]:
        return self.libraries.get(name)


@dataclass(frozen=True)
class LinkAttempt:
    extra_components: Tuple[str, ...] = ()
    extra_libraries: Tuple[str, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()


def try_link(enabled: Iterable[str], locator: LibraryLocator, search_paths: Sequence[str],
             package_version=None) -> LinkAttempt:
    """Locate the lld libraries the wasm backend needs, if it is enabled"""
    if WASM_CAPABILITY not in enabled:
        return LinkAttempt()

    found = {name: locator.locate(name, search_paths) for name in WASM_LIBRARIES}
    missing = [name for name, library in found.items() if not library]

    if missing:
        hint = ""
        if package_version is not None:
            hint = f" Do you need to install liblld-{package_version.major}?"
        message = (
            f"Could not find both {' and '.join(WASM_LIBRARIES)} in {list(search_paths)} "
            f"(missing: {', '.join(missing)}). {WASM_CAPABILITY} support will be incomplete. "
            f"Configure with TARGET_{WASM_CAPABILITY.upper()}=NO to suppress.{hint}"
        )
        return LinkAttempt(diagnostics=(
            Diagnostic(DiagnosticCode.OptionalArtifactMissing, message, Severity.WARNING),
        ))

    logger.debug(f"Found lld libraries for {WASM_CAPABILITY}: {found}")
    return LinkAttempt(
        extra_components=WASM_COMPONENTS,
        extra_libraries=tuple(found[name] for name in WASM_LIBRARIES),
    )
