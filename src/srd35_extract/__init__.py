"""
srd35-extract - D&D 3.5 SRD monster and spell extraction into structured JSON.
"""

from .errors import ExtractError
from .models import MonsterRecord, SpellField, Statblock

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("srd35-extract")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = ["ExtractError", "MonsterRecord", "Statblock", "SpellField"]
