"""Column validation service.

Validates column definitions and batch patches before they reach the
store. Supports column types: text, number, select, date, checkbox.

Validation is structural only. Option ids in rows are never checked
against a select column's options, and changing a column's type never
validates existing row values.
"""

from dataclasses import asdict, dataclass
from typing import Any

from gridbase.domain.entities import ColumnPatch, ColumnType


@dataclass
class ColumnValidationError:
    """A single column validation error."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ColumnValidator:
    """Validator for column creation and update input."""

    MAX_NAME_LENGTH = 255
    MAX_OPTION_LABEL_LENGTH = 255

    @classmethod
    def validate_name(cls, name: Any, path: str = "name") -> list[ColumnValidationError]:
        """Validate a column name.

        Args:
            name: The name to validate.
            path: Field path used in error messages.

        Returns:
            List of validation errors (empty if valid).
        """
        if not isinstance(name, str):
            return [
                ColumnValidationError(
                    field=path,
                    message=f"Column name must be a string, got {type(name).__name__}",
                    code="name_invalid_type",
                )
            ]

        errors = []
        if not name.strip():
            errors.append(
                ColumnValidationError(
                    field=path,
                    message="Column name cannot be blank",
                    code="name_blank",
                )
            )
        if len(name) > cls.MAX_NAME_LENGTH:
            errors.append(
                ColumnValidationError(
                    field=path,
                    message=f"Column name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            )
        return errors

    @classmethod
    def validate_type(cls, column_type: Any, path: str = "type") -> list[ColumnValidationError]:
        """Validate a column type name."""
        valid_types = [t.value for t in ColumnType]
        if isinstance(column_type, ColumnType):
            return []
        if not isinstance(column_type, str) or column_type.lower() not in valid_types:
            return [
                ColumnValidationError(
                    field=path,
                    message=f"Invalid column type '{column_type}'. Valid types: {', '.join(valid_types)}",
                    code="type_invalid",
                )
            ]
        return []

    @classmethod
    def validate_options(cls, options: Any, path: str) -> list[ColumnValidationError]:
        """Validate a select option list.

        Each option needs a non-empty string ``id`` (unique within the
        list) plus string ``label`` and ``color``.
        """
        if not isinstance(options, list):
            return [
                ColumnValidationError(
                    field=path,
                    message="Options must be a list",
                    code="options_invalid_type",
                )
            ]

        errors = []
        seen_ids: set[str] = set()
        for i, option in enumerate(options):
            option_path = f"{path}[{i}]"
            if not isinstance(option, dict):
                errors.append(
                    ColumnValidationError(
                        field=option_path,
                        message="Option must be an object with id, label and color",
                        code="option_invalid_type",
                    )
                )
                continue

            option_id = option.get("id")
            if not isinstance(option_id, str) or not option_id:
                errors.append(
                    ColumnValidationError(
                        field=f"{option_path}.id",
                        message="Option id is required",
                        code="option_id_required",
                    )
                )
            elif option_id in seen_ids:
                errors.append(
                    ColumnValidationError(
                        field=f"{option_path}.id",
                        message=f"Duplicate option id '{option_id}'",
                        code="option_id_duplicate",
                    )
                )
            else:
                seen_ids.add(option_id)

            label = option.get("label", "")
            if not isinstance(label, str):
                errors.append(
                    ColumnValidationError(
                        field=f"{option_path}.label",
                        message="Option label must be a string",
                        code="option_label_invalid",
                    )
                )
            elif len(label) > cls.MAX_OPTION_LABEL_LENGTH:
                errors.append(
                    ColumnValidationError(
                        field=f"{option_path}.label",
                        message=f"Option label must be at most {cls.MAX_OPTION_LABEL_LENGTH} characters",
                        code="option_label_too_long",
                    )
                )

            if not isinstance(option.get("color", ""), str):
                errors.append(
                    ColumnValidationError(
                        field=f"{option_path}.color",
                        message="Option color must be a string",
                        code="option_color_invalid",
                    )
                )

        return errors

    @classmethod
    def validate_config(cls, config: Any, path: str = "config") -> list[ColumnValidationError]:
        """Validate a column config object.

        Options are accepted on any column type so that switching a
        column to ``select`` and back keeps them.
        """
        if not isinstance(config, dict):
            return [
                ColumnValidationError(
                    field=path,
                    message="Config must be an object",
                    code="config_invalid_type",
                )
            ]
        if "options" in config:
            return cls.validate_options(config["options"], f"{path}.options")
        return []

    @classmethod
    def validate_position(cls, position: Any, path: str = "position") -> list[ColumnValidationError]:
        # bool is an int subclass
        if not isinstance(position, int) or isinstance(position, bool):
            return [
                ColumnValidationError(
                    field=path,
                    message=f"Position must be an integer, got {type(position).__name__}",
                    code="position_invalid_type",
                )
            ]
        return []

    @classmethod
    def validate_new_column(
        cls, name: Any = None, column_type: Any = None, config: Any = None
    ) -> list[ColumnValidationError]:
        """Validate the optional fields of a column being added."""
        errors = []
        if name is not None:
            errors.extend(cls.validate_name(name))
        if column_type is not None:
            errors.extend(cls.validate_type(column_type))
        if config is not None:
            errors.extend(cls.validate_config(config))
        return errors

    @classmethod
    def validate_patch(cls, patch: Any, index: int) -> list[ColumnValidationError]:
        """Validate one entry of a batch column update."""
        path = f"columns[{index}]"
        if not isinstance(patch, dict):
            return [
                ColumnValidationError(
                    field=path,
                    message="Column patch must be an object",
                    code="patch_invalid_type",
                )
            ]

        errors = []
        column_id = patch.get("id")
        if not isinstance(column_id, str) or not column_id:
            errors.append(
                ColumnValidationError(
                    field=f"{path}.id",
                    message="Column id is required",
                    code="id_required",
                )
            )
        if patch.get("name") is not None:
            errors.extend(cls.validate_name(patch["name"], f"{path}.name"))
        if patch.get("type") is not None:
            errors.extend(cls.validate_type(patch["type"], f"{path}.type"))
        if patch.get("position") is not None:
            errors.extend(cls.validate_position(patch["position"], f"{path}.position"))
        if patch.get("config") is not None:
            errors.extend(cls.validate_config(patch["config"], f"{path}.config"))
        return errors

    @classmethod
    def validate_patches(cls, patches: Any) -> list[ColumnValidationError]:
        """Validate a batch column update.

        The batch must be a non-empty list, and a column may appear only
        once per batch.
        """
        if not isinstance(patches, list) or not patches:
            return [
                ColumnValidationError(
                    field="columns",
                    message="Columns must be a non-empty list of patches",
                    code="columns_required",
                )
            ]

        errors = []
        seen_ids: set[str] = set()
        for i, patch in enumerate(patches):
            errors.extend(cls.validate_patch(patch, i))
            column_id = patch.get("id") if isinstance(patch, dict) else None
            if isinstance(column_id, str) and column_id:
                if column_id in seen_ids:
                    errors.append(
                        ColumnValidationError(
                            field=f"columns[{i}].id",
                            message=f"Column '{column_id}' appears more than once",
                            code="id_duplicate",
                        )
                    )
                seen_ids.add(column_id)
        return errors

    @staticmethod
    def to_patch(patch: dict[str, Any]) -> ColumnPatch:
        """Build a ``ColumnPatch`` from a validated patch dict."""
        column_type = patch.get("type")
        return ColumnPatch(
            id=patch["id"],
            name=patch.get("name"),
            type=ColumnType(column_type.lower()) if isinstance(column_type, str) else column_type,
            position=patch.get("position"),
            config=patch.get("config"),
        )
