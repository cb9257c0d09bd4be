"""
Task Board Backend — Task Field Validation
============================================

What:  The ordered field checks shared by POST /tasks and PATCH /tasks/{id},
       plus the identifier and email normalizers used by every task route.
How:   Each check appends a {"field", "message"} entry; the first entry
       becomes the ValidationError message, the full list goes into
       `details.errors`. Clients that only read the message see the same
       first-failure behavior as a short-circuiting validator.

Check order (fixed):
    1. title        non-empty after trim
    2. category     present
    3. description  non-empty after trim
    4. deadline     present
    5. budget       present and a finite number (numeric strings accepted)
    6. userEmail    present (create only)
    7. deadline     parses to a valid date
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId

from app.exceptions import ValidationError

FieldErrors = List[Dict[str, str]]

# BSON integers are signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_budget(value: Any) -> Optional[float]:
    """
    Coerce a budget to a finite number.

    Returns:
        int or float on success, None when the value is not numeric.
        Integral values stay ints while they fit in 64 bits; larger ones are
        kept as floats. Booleans are rejected even though they are ints.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return value
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer() and INT64_MIN <= number <= INT64_MAX:
        return int(number)
    return number


def parse_deadline(value: Any) -> Optional[datetime]:
    """
    Parse a deadline into an aware UTC datetime.

    Accepts ISO-8601 dates ("2025-01-01"), ISO-8601 datetimes (with or
    without offset, "Z" included) and epoch milliseconds. Naive values are
    taken as UTC. Returns None when the value is not a valid date.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def validate_task_fields(payload: Dict[str, Any], require_author: bool = False) -> Tuple[Dict[str, Any], FieldErrors]:
    """
    Run the ordered checks over a task payload.

    Args:
        payload: Raw request fields (title, category, description, deadline,
                 budget and, for creation, userEmail)
        require_author: Check userEmail as well (POST /tasks)

    Returns:
        (normalized fields, errors). Normalized fields are only meaningful
        when errors is empty.
    """
    errors: FieldErrors = []
    fields: Dict[str, Any] = {}

    def fail(field: str, message: str) -> None:
        errors.append({"field": field, "message": message})

    title = payload.get("title")
    if _is_blank(title) or not isinstance(title, str):
        fail("title", "title is required")
    else:
        fields["title"] = title.strip()

    category = payload.get("category")
    if _is_blank(category):
        fail("category", "category is required")
    else:
        fields["category"] = category.strip() if isinstance(category, str) else category

    description = payload.get("description")
    if _is_blank(description) or not isinstance(description, str):
        fail("description", "description is required")
    else:
        fields["description"] = description.strip()

    deadline = payload.get("deadline")
    deadline_present = not _is_blank(deadline)
    if not deadline_present:
        fail("deadline", "deadline is required")

    budget = payload.get("budget")
    if _is_blank(budget):
        fail("budget", "budget is required")
    else:
        number = parse_budget(budget)
        if number is None:
            fail("budget", "budget must be a number")
        else:
            fields["budget"] = number

    if require_author and _is_blank(payload.get("userEmail")):
        fail("userEmail", "userEmail is required")

    if deadline_present:
        parsed = parse_deadline(deadline)
        if parsed is None:
            fail("deadline", "deadline must be a valid date")
        else:
            fields["deadline"] = parsed

    return fields, errors


def raise_for_errors(errors: FieldErrors) -> None:
    """Raise a ValidationError carrying every collected error, first one as the message."""
    if errors:
        first = errors[0]
        raise ValidationError(message=first["message"], field=first["field"], errors=errors)


def parse_object_id(value: str) -> ObjectId:
    """Parse a path identifier; malformed ids are a client error, not a 404."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(message="Invalid task id", field="id")


def normalize_email(value: Optional[str], field: str = "email") -> str:
    """Trim and lower-case an email; missing or blank is a 400."""
    if value is None or not str(value).strip():
        raise ValidationError(message=f"{field} is required", field=field)
    return str(value).strip().lower()
