"""
Service layer for the hostel income ledger.
"""
