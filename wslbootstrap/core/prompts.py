"""
Operator input helpers: the destructive-action gate and required-field checks.
"""

from typing import Callable, Optional

from wslbootstrap.exceptions import EmptyInputError
from wslbootstrap.models.results import Result


def confirm_destructive_action(
    expected_literal: str, read_line: Callable[[], str] = input
) -> bool:
    """
    Read one line and compare it, trimmed, to expected_literal.

    Case-sensitive exact match. Anything else, including EOF, is a
    cancellation and returns False.
    """
    try:
        answer = read_line()
    except EOFError:
        return False
    if answer is None:
        return False
    return answer.strip() == expected_literal


def require_value(
    value: Optional[str], field_name: str, default: Optional[str] = None
) -> Result[str]:
    """
    Validate a required text field, substituting default when it is blank.

    Returns:
        Result holding the stripped value, or an EmptyInputError
    """
    value = (value or "").strip()
    if not value and default:
        value = default.strip()
    if not value:
        return Result.fail(EmptyInputError(field_name))
    return Result.ok(value)
