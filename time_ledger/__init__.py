"""
Time Ledger: start/stop time tracking on top of a tabular document store.
"""

__version__ = '1.0.0'
