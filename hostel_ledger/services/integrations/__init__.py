"""
Clients for external collaborators.
"""

from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient

__all__ = ["HostelApiClient"]
