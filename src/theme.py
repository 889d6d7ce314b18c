"""Color & style helpers.

Decisions:
- Status keys are the stored ones: 'pending', 'in_progress', 'completed'.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or the .env nearest the cwd
  (the same file config.py loads).
"""
from __future__ import annotations
import os, sys
from dotenv import dotenv_values, find_dotenv

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = {'TODO_PRIMARY', 'TODO_PENDING', 'TODO_INPROGRESS', 'TODO_COMPLETED'}

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def read_env_overrides(env_path: str = "") -> dict[str, str]:
    """Collect valid palette overrides from a .env file (default: nearest to the cwd)."""
    env_path = env_path or find_dotenv(usecwd=True)
    if not env_path:
        return {}
    return {k: "#" + v.lstrip("#") for k, v in dotenv_values(env_path).items()
            if k in PALETTE_KEYS and v and _is_hex(v)}

def _pick(key: str, default: str) -> str:
    """Priority: real env var > .env override > default."""
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_PENDING_DEFAULT = '#48B3AF'
HEX_INPROGRESS_DEFAULT = '#F6FF99'
HEX_COMPLETED_DEFAULT = '#A7E399'

_ENV_OVERRIDES = read_env_overrides()

HEX_PRIMARY = _pick('TODO_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_PENDING = _pick('TODO_PENDING', HEX_PENDING_DEFAULT)
HEX_INPROGRESS = _pick('TODO_INPROGRESS', HEX_INPROGRESS_DEFAULT)
HEX_COMPLETED = _pick('TODO_COMPLETED', HEX_COMPLETED_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)

STATUS_COLOR = {
    'pending': _from_hex(HEX_PENDING),
    'in_progress': _from_hex(HEX_INPROGRESS),
    'completed': _from_hex(HEX_COMPLETED),
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','STATUS_COLOR','HEADER_COLOR','ID_COLOR','EMPTY_COLOR',
    'HEX_PRIMARY','HEX_PENDING','HEX_INPROGRESS','HEX_COMPLETED','read_env_overrides',
]
