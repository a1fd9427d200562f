"""CLI command handlers."""

from .substitute import substitute_files
from .rollback import rollback_files

__all__ = ['substitute_files', 'rollback_files']
