"""
ExpenseScan: receipt image to canonical expense record.
"""

__version__ = "0.1.0"
