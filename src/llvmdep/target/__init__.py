"""
Target backend capabilities

Detection of optional LLVM backends, user override reconciliation and the
optional lld linkage needed by the WebAssembly backend.
"""

from .capability import *
from .options import *
from .wasm import *
