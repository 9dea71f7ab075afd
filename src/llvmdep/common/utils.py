import re
from typing import Any, List, Optional

from ..errors import ConfigError

_TRUE_WORDS = frozenset(['1', 'ON', 'YES', 'TRUE', 'Y'])
_FALSE_WORDS = frozenset(['0', 'OFF', 'NO', 'FALSE', 'N', 'IGNORE', 'NOTFOUND', ''])

def parse_bool(value: Any, name: str = 'value') -> bool:
    '''Interpret a CMake-style boolean (ON/OFF, YES/NO, TRUE/FALSE, 1/0)'''
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value != 0

    if isinstance(value, str):
        word = value.strip().upper()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS or word.endswith('-NOTFOUND'):
            return False

    raise ConfigError(f'{name}: cannot interpret {value!r} as a boolean')

def parse_optional_bool(value: Any, name: str = 'value') -> Optional[bool]:
    if value is None:
        return None
    return parse_bool(value, name)

def split_list(value: Any) -> List[str]:
    '''Accept a list or a CMake ";"/whitespace separated string'''
    if value is None:
        return []

    if isinstance(value, str):
        return [item for item in re.split(r'[;\s]+', value) if item]

    return [str(item) for item in value]

def unique(items) -> List:
    '''Drop duplicates, keeping first occurrence order'''
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
