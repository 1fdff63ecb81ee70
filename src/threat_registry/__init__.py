"""
Threat Registry

Role-gated registry for reporting and adjudicating security threats
"""

try:
    from importlib.metadata import version
    __version__ = version("threat-registry")
except Exception:
    # Fallback for development installs
    __version__ = "0.0.0-dev"

from . import core

__all__ = ['core', '__version__']
