"""Replace process.env references in built static files at container start-up."""

from env_at_startup.config import SubstitutionConfig
from env_at_startup.variables import AllowList

__version__ = "1.0.0"

__all__ = ['AllowList', 'SubstitutionConfig', '__version__']
