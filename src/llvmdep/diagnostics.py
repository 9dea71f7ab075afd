'''Non-fatal diagnostics collected during resolution'''

from dataclasses import dataclass
from enum import auto

from .common import Enum2, IntEnum2


class Severity(IntEnum2):
    DEBUG = 10
    INFO = 20
    WARNING = 30


class DiagnosticCode(Enum2):
    VersionAboveTestedRange = auto()
    OptionalArtifactMissing = auto()


@dataclass(frozen=True)
class Diagnostic:
    '''One informational or warning message; never changes exit status'''
    code: DiagnosticCode
    message: str
    severity: Severity = Severity.WARNING

    def to_dict(self) -> dict:
        return {
            'code': str(self.code),
            'severity': str(self.severity),
            'message': self.message,
        }

    def __str__(self):
        return f'[{self.severity}] {self.code}: {self.message}'
