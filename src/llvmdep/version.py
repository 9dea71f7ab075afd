'''
Package version model and the supported-range gate
'''

import logging
import re
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .diagnostics import Diagnostic, DiagnosticCode, Severity
from .errors import VersionTooLowError

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r'^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+.a-zA-Z].*)?\s*$')


@dataclass(frozen=True, order=True)
class PackageVersion:
    '''(major, minor) version; patch is carried for display only'''
    major: int
    minor: int = 0
    patch: int = field(default=0, compare=False)

    @classmethod
    def parse(cls, value: Union[str, int, Tuple[int, ...], 'PackageVersion']) -> 'PackageVersion':
        '''Parse "12", "12.0", "12.0.1", (12, 0) or an existing version'''
        if isinstance(value, PackageVersion):
            return value

        if isinstance(value, (tuple, list)):
            if not 1 <= len(value) <= 3:
                raise ValueError(f'Invalid version tuple: {value!r}')
            return cls(*(int(v) for v in value))

        if isinstance(value, bool):
            raise ValueError(f'Invalid version: {value!r}')

        # 11.10 would silently become 11.1
        if isinstance(value, float):
            raise ValueError(f'Ambiguous version {value!r}: write it as a quoted string, e.g. "11.10"')

        m = _VERSION_RE.match(str(value))
        if m is None:
            raise ValueError(f'Invalid version: {value!r}')

        major, minor, patch = m.groups()
        return cls(int(major), int(minor or 0), int(patch or 0))

    @property
    def compact(self) -> str:
        '''Major and minor run together, as used in the LLVM_VERSION definition'''
        return f'{self.major}{self.minor}'

    def __str__(self):
        if self.patch:
            return f'{self.major}.{self.minor}.{self.patch}'
        return f'{self.major}.{self.minor}'


@dataclass(frozen=True)
class GateResult:
    ok: bool
    diagnostics: Tuple[Diagnostic, ...] = ()


def check_version(version, min_version, soft_max_version) -> GateResult:
    '''
    Validate a package version against the supported range.

    Raises VersionTooLowError below min_version. Above soft_max_version the
    version is accepted with a VersionAboveTestedRange warning.
    '''
    version = PackageVersion.parse(version)
    min_version = PackageVersion.parse(min_version)
    soft_max_version = PackageVersion.parse(soft_max_version)

    if version < min_version:
        raise VersionTooLowError(version, min_version)

    diagnostics: List[Diagnostic] = []
    if version > soft_max_version:
        diagnostics.append(Diagnostic(
            DiagnosticCode.VersionAboveTestedRange,
            f'Not tested on LLVM versions beyond {soft_max_version} (found {version})',
            Severity.WARNING,
        ))

    logger.debug(f'Version {version} accepted (range {min_version} .. {soft_max_version})')
    return GateResult(True, tuple(diagnostics))
