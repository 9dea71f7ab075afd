'''
Fatal resolution errors

Every fatal condition aborts resolution immediately; no partial
ResolvedConfiguration is ever returned alongside one of these.
'''

from typing import Optional, Sequence


class ResolutionError(RuntimeError):
    '''Base class for fatal resolution failures'''

    code = 'ResolutionError'

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    def __str__(self):
        return f'{self.code}: {self.args[0]}'


class VersionTooLowError(ResolutionError):
    code = 'VersionTooLow'

    def __init__(self, version, min_version):
        super().__init__(f'LLVM version must be {min_version} or newer (found {version})')
        self.version = version
        self.min_version = min_version


class RTTIConflictError(ResolutionError):
    code = 'RTTIConflict'

    def __init__(self, package_name: str = 'LLVM'):
        super().__init__(
            f"Can't enable RTTI. {package_name} was compiled without it. "
            f'Configure with enable_rtti=OFF or use an RTTI-enabled {package_name} build.'
        )
        self.package_name = package_name


class UnresolvableComponentError(ResolutionError):
    code = 'UnresolvableComponent'

    def __init__(self, component: str, known: Sequence[str] = ()):
        message = f'No link library found for component {component!r}'
        if known:
            message += f' (available: {", ".join(known)})'
        super().__init__(message)
        self.component = component


class ConfigError(ValueError):
    '''Malformed user configuration or package descriptor file'''
