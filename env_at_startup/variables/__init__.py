"""
Variable reference module.
Scanning, position resolution and allow-list filtering of env references.
"""

from .allow_list import AllowList
from .matcher import DEFAULT_PREFIX, Occurrence, Position, ReferenceScanner, resolve_position

__all__ = [
    'AllowList',
    'DEFAULT_PREFIX',
    'Occurrence',
    'Position',
    'ReferenceScanner',
    'resolve_position',
]
