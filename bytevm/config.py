from __future__ import annotations
import os


_DEFAULT_PROFILE = 'double'
_FALSE_VALUES = ('', '0', 'false', 'no', 'off')


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def get_profile() -> str:
    return os.environ.get('BYTEVM_PROFILE', _DEFAULT_PROFILE).strip().lower() or _DEFAULT_PROFILE


def trace_enabled() -> bool:
    return flag_from_env('BYTEVM_TRACE')


def disasm_enabled() -> bool:
    return flag_from_env('BYTEVM_DISASM')
