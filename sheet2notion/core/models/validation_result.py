"""
ValidationResult model representing the outcome of validating a row or a mapping list.
"""

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of a validation pass (ephemeral, never persisted).

    Attributes:
        valid: Overall validation status
        errors: Ordered error messages; empty when valid
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)

    @field_validator("errors")
    @classmethod
    def check_valid_consistency(cls, v, info):
        """Validate that valid=True implies errors is empty."""
        if info.data.get("valid") and len(v) > 0:
            raise ValueError("valid=True but errors is not empty")
        return v

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors))

    class Config:
        json_schema_extra = {
            "example": {
                "valid": False,
                "errors": [
                    "Required field 'C (Name)' is empty",
                    "Field 'E (Amount)' must be a valid number, got 'abc'",
                ],
            }
        }
