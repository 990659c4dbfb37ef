"""Row data validation.

Row data is schemaless, so only its shape is checked: an object whose keys
are column ids and whose values are scalars (string, finite number,
boolean or null). Values are not checked against column types; a row may
legitimately hold a value written under a column's previous type.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class RowValidationError:
    """A single row data validation error."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class RowDataValidator:
    """Validator for row data objects."""

    @classmethod
    def validate_value(cls, value: Any, key: str) -> RowValidationError | None:
        """Validate a single cell value."""
        if value is None or isinstance(value, (str, bool)):
            return None

        if isinstance(value, int):
            try:
                float(value)
            except OverflowError:
                return RowValidationError(
                    field=f"data.{key}",
                    message="Integer is too large to represent as a number",
                    code="invalid_number",
                )
            return None

        if isinstance(value, float):
            if math.isfinite(value):
                return None
            return RowValidationError(
                field=f"data.{key}",
                message="Number values must be finite",
                code="invalid_number",
            )

        return RowValidationError(
            field=f"data.{key}",
            message=f"Expected a string, number, boolean or null, got {type(value).__name__}",
            code="invalid_type",
        )

    @classmethod
    def validate_data(cls, data: Any) -> list[RowValidationError]:
        """Validate a full row data object.

        Args:
            data: The candidate row data.

        Returns:
            List of validation errors (empty if valid).
        """
        if not isinstance(data, dict):
            return [
                RowValidationError(
                    field="data",
                    message=f"Row data must be an object, got {type(data).__name__}",
                    code="data_invalid_type",
                )
            ]

        errors: list[RowValidationError] = []
        for key, value in data.items():
            if not isinstance(key, str) or not key:
                errors.append(
                    RowValidationError(
                        field="data",
                        message=f"Row data keys must be non-empty column ids, got {key!r}",
                        code="invalid_key",
                    )
                )
                continue
            error = cls.validate_value(value, key)
            if error:
                errors.append(error)
        return errors
