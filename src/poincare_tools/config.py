"""Configuration: external command names and log level from environment."""

import os

DEFAULT_MPOST = 'mpost'
DEFAULT_TEX = 'tex'
DEFAULT_DVIPS = 'dvips'


def get_mpost_command() -> str:
    """Return the MetaPost compiler command (POINCARE_MPOST env var or default)."""
    return os.environ.get('POINCARE_MPOST', '').strip() or DEFAULT_MPOST


def get_tex_command() -> str:
    """Return the plain TeX command (POINCARE_TEX env var or default)."""
    return os.environ.get('POINCARE_TEX', '').strip() or DEFAULT_TEX


def get_dvips_command() -> str:
    """Return the DVI-to-PostScript command (POINCARE_DVIPS env var or default)."""
    return os.environ.get('POINCARE_DVIPS', '').strip() or DEFAULT_DVIPS


def get_log_level() -> str | None:
    """Return log level name from POINCARE_TOOLS_LOG, or None if unset/invalid.

    Returns:
        One of DEBUG, INFO, WARNING, ERROR, CRITICAL, or None.
    """
    level = os.environ.get('POINCARE_TOOLS_LOG', '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None
