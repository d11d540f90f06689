"""
Core utilities and infrastructure for the hostel income ledger.
"""
