from hostel_ledger.schemas.common.base import BaseSchema, FrozenSchema

__all__ = ["BaseSchema", "FrozenSchema"]
