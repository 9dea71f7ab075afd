"""
Target capability models

Defines the optional LLVM backend targets a dependent project knows about,
the compile definition and component each one contributes when enabled, and
which of them an installed LLVM actually provides.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from enum import auto
from typing import Dict, Iterable, Mapping, Optional

from ..common import Enum2
from ..version import PackageVersion

logger = logging.getLogger(__name__)


class Override(Enum2):
    """Explicit user instruction for a capability"""
    UNSET = auto()
    ON = auto()
    OFF = auto()

    @classmethod
    def from_value(cls, value: Optional[bool]) -> 'Override':
        if value is None:
            return cls.UNSET
        return cls.ON if value else cls.OFF


@dataclass(frozen=True)
class CapabilityRule:
    """What an enabled capability contributes to the build"""
    name: str
    option: str         # TARGET_X86
    definition: str     # WITH_X86
    component: str      # X86

    @classmethod
    def for_target(cls, name: str) -> 'CapabilityRule':
        return cls(
            name=name,
            option=f"TARGET_{name.upper()}",
            definition=f"WITH_{name.upper()}",
            component=name,
        )


@dataclass(frozen=True)
class CapabilityEntry:
    """A known capability with its detection result and user override"""
    name: str
    detected: bool
    override: Override = Override.UNSET

    @property
    def enabled(self) -> bool:
        if self.override is Override.UNSET:
            return self.detected
        return self.override is Override.ON


# Registration order is output order
KNOWN_TARGETS = (
    "AArch64",
    "AMDGPU",
    "ARM",
    "Hexagon",
    "Mips",
    "NVPTX",
    "PowerPC",
    "RISCV",
    "WebAssembly",
    "X86",
)

# LLVM 10 and below can't be used for wasm codegen
VERSION_FLOORS: Dict[str, PackageVersion] = {
    "WebAssembly": PackageVersion(11, 0),
}

CAPABILITY_RULES: Dict[str, CapabilityRule] = {
    name: CapabilityRule.for_target(name) for name in KNOWN_TARGETS
}


def get_capability_rule(name: str, rules: Optional[Mapping[str, CapabilityRule]] = None) -> CapabilityRule:
    """Get the rule for a capability, deriving the default one for unregistered names"""
    rule = (CAPABILITY_RULES if rules is None else rules).get(name)
    if rule is None:
        rule = CapabilityRule.for_target(name)
    return rule


def available_capabilities(known_names: Iterable[str], version, version_floors: Mapping[str, PackageVersion]) -> list:
    """Known names minus those whose version floor is above the package version"""
    version = PackageVersion.parse(version)
    result = []
    for name in known_names:
        floor = version_floors.get(name)
        if floor is not None and version < PackageVersion.parse(floor):
            logger.debug(f"{name} requires version {floor} or newer, dropping it (found {version})")
            continue
        result.append(name)
    return result


def detect(known_names: Iterable[str], descriptor, version_floors: Optional[Mapping[str, PackageVersion]] = None) -> "OrderedDict[str, CapabilityEntry]":
    """
    Determine which known capabilities the package provides.

    Capabilities below their version floor are removed before detection and
    never appear in the result. Caller order is preserved.
    """
    if version_floors is None:
        version_floors = VERSION_FLOORS

    entries: "OrderedDict[str, CapabilityEntry]" = OrderedDict()
    for name in available_capabilities(known_names, descriptor.version, version_floors):
        if name in entries:
            continue
        entries[name] = CapabilityEntry(name, descriptor.has_target(name))

    return entries
