"""Input-layer public API for key decoding and dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
dispatcher used by the runtime loop.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import QUIT_KEYS, DispatchContext, KeyDispatcher
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "DispatchContext",
    "KeyDispatcher",
    "QUIT_KEYS",
]
