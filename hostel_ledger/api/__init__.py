"""
HTTP API for the hostel income ledger.
"""
