"""
Hostel income ledger.

Reconciles bed occupancy records fetched from the hostel backend into
income reports for a chosen date range.
"""

__version__ = "0.1.0"
