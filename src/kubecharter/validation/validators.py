"""
Validation functions for configuration values.
"""

from typing import Any, List, Optional

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Booleans and floats with a fractional part are rejected.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value!r}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value!r}",
            field_name=field_name,
            value=value
        )
    if min_value is not None and int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)
    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value!r}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    if str_value.lower() not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value!r}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(str_value.lower())]


def validate_string(value: Any, field_name: str = "value", allow_empty: bool = True) -> str:
    """Validate that a value is a string, optionally non-empty."""
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {value!r}",
            field_name=field_name,
            value=value
        )
    if not allow_empty and not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value


def validate_bool(value: Any, field_name: str = "value") -> bool:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_group_names(groups: Any, field_name: str = "groups") -> List[str]:
    """
    Validate the list of monitored group names.

    The list must be non-empty, contain only non-empty strings and have no
    duplicates. Order is preserved because it drives the chart order in the
    report.

    Raises:
        ValidationError: If the list is malformed
    """
    if not isinstance(groups, list) or not groups:
        raise ValidationError(
            f"{field_name} must be a non-empty list of group names",
            field_name=field_name,
            value=groups
        )

    validated = []
    for i, group in enumerate(groups):
        name = validate_string(group, field_name=f"{field_name}[{i}]", allow_empty=False).strip()
        if name in validated:
            raise ValidationError(
                f"{field_name} must be unique, '{name}' is listed twice",
                field_name=field_name,
                value=groups
            )
        validated.append(name)
    return validated
