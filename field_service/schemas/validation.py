"""
Result of validating a form.

``errors`` maps a field name to a human readable message.  A missing
key means the field passed; ``is_valid`` is true exactly when the map
is empty.
"""

from typing import Dict

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Dict[str, str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=dict(errors))
