"""
Option resolution

Reconciles detected capabilities with explicit user overrides and collects
the compile definitions and components the enabled ones request.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..common import parse_optional_bool
from .capability import CapabilityEntry, CapabilityRule, Override, get_capability_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionResult:
    enabled: Tuple[str, ...]
    requested_components: Tuple[str, ...]
    definitions: Tuple[str, ...]
    entries: Tuple[CapabilityEntry, ...] = ()


def _override_key(key: str) -> str:
    key = key.strip().upper()
    if key.startswith("TARGET_"):
        key = key[len("TARGET_"):]
    return key


def normalize_overrides(overrides: Optional[Mapping[str, object]]) -> Dict[str, Override]:
    """
    Map override keys to upper-case capability names.

    Keys may be a capability name in any case ("x86") or its option name
    ("TARGET_X86"). Values may be Override members or booleans / None.
    """
    result: Dict[str, Override] = {}
    for key, value in (overrides or {}).items():
        if not isinstance(value, Override):
            value = Override.from_value(parse_optional_bool(value, key))
        result[_override_key(key)] = value
    return result


def resolve_options(entries: Mapping[str, CapabilityEntry], overrides: Optional[Mapping[str, object]] = None,
                    rules: Optional[Mapping[str, CapabilityRule]] = None) -> OptionResult:
    """Apply overrides to detected entries, in entry order"""
    pending = normalize_overrides(overrides)

    resolved: List[CapabilityEntry] = []
    enabled: List[str] = []
    components: List[str] = []
    definitions: List[str] = []

    for name, entry in entries.items():
        override = pending.pop(name.upper(), Override.UNSET)
        entry = CapabilityEntry(entry.name, entry.detected, override)
        resolved.append(entry)

        if not entry.enabled:
            continue

        rule = get_capability_rule(name, rules)
        enabled.append(name)
        definitions.append(rule.definition)
        components.append(rule.component)

    # Shared override files may name targets this package doesn't know about
    for key, value in pending.items():
        if value is not Override.UNSET:
            logger.debug(f"Ignoring override {key}={value}: not a known capability for this package")

    return OptionResult(tuple(enabled), tuple(components), tuple(definitions), tuple(resolved))
