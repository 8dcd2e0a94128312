"""
Process configuration.
"""
from .settings import LedgerSettings, BACKEND_MEMORY, BACKEND_SHEETS

__all__ = ['LedgerSettings', 'BACKEND_MEMORY', 'BACKEND_SHEETS']
