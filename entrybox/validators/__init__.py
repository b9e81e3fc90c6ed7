"""
validators package
------------------
Validation rules applied before entry writes commit.
"""
from entrybox.validators.entry import validate_kind, validate_status

__all__ = ["validate_kind", "validate_status"]
