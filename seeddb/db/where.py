##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
WHERE clause mini-language.

Conditions are given as an ordered mapping of condition key to value:

- `{"status": "active"}` renders `` `status` = ? `` and binds "active".
- `{"age >=": 18}` renders `` `age` >= ? ``; a key ending in a recognized operator keeps
  its operator and gets a single placeholder.
- `{"deleted_at IS NULL": None}` renders the key verbatim; a `None` value means the key
  is a complete boolean expression and nothing is bound.
- `{"OR role =": "admin"}` renders `OR role = ?`; a fragment that already starts with
  AND/OR is joined with a space instead of an inserted AND.
"""

import re
from typing import Any, List, Mapping, Optional, Tuple

from seeddb.db.escaping import escape_column_name


# Longest first so that "IS NOT" wins over "IS" and ">=" over "=".
OPERATORS = tuple(
    sorted(
        ("=", "<", ">", ">=", "<=", "<>", "!=", "*=", "IS", "IS NOT", "BETWEEN", "IN", "NOT IN", "LIKE", "NOT LIKE"),
        key=len,
        reverse=True,
    )
)

JOINERS = ("AND", "OR")

PLACEHOLDER = "?"

SIMPLE_COLUMN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)?$")


def split_operator(key: str) -> Optional[Tuple[str, str]]:
    """
    Split a condition key into its left-hand side and trailing operator.

    The operator must be separated from the left-hand side by whitespace and is
    matched case-insensitively.

    Examples:
        >>> split_operator("age >=")
        ('age', '>=')
        >>> split_operator("id not in")
        ('id', 'not in')
        >>> split_operator("status") is None
        True

    Args:
        key: A condition key.

    Returns:
        A tuple of (left-hand side, operator as written), or None when the key doesn't
        end in a recognized operator.
    """
    stripped = key.rstrip()
    upper = stripped.upper()

    for operator in OPERATORS:
        if not upper.endswith(operator):
            continue
        head = stripped[: len(stripped) - len(operator)]
        if head.strip() and head[-1].isspace():
            return head.rstrip(), stripped[len(head) :]

    return None


def starts_with_joiner(fragment: str) -> bool:
    """
    Check whether a rendered fragment already starts with its own AND/OR joiner.

    Args:
        fragment: A rendered condition.

    Returns:
        True if the first word of `fragment` is AND or OR (any case).
    """
    parts = fragment.split(None, 1)
    return len(parts) == 2 and parts[0].upper() in JOINERS


def render_condition(key: str) -> str:
    """
    Render the SQL for a condition key that binds one value.

    Args:
        key: A bare column name or a key ending in an operator.

    Returns:
        The condition with a trailing placeholder.
    """
    split = split_operator(key)
    if split is None:
        return f"{escape_column_name(key)} = {PLACEHOLDER}"

    head, operator = split
    if SIMPLE_COLUMN.match(head.strip()):
        head = escape_column_name(head)
    return f"{head} {operator} {PLACEHOLDER}"


def build_where_clause(conditions: Optional[Mapping[str, Any]]) -> Tuple[str, List[Any]]:
    """
    Build a parameterized WHERE clause from an ordered condition mapping.

    Examples:
        >>> build_where_clause({"age >=": 18, "status": None})
        ('WHERE `age` >= ? AND status', [18])
        >>> build_where_clause({})
        ('', [])

    Args:
        conditions: Ordered mapping of condition key to value (or None).

    Returns:
        A tuple of (clause, bound values). The clause is empty when there are no
        conditions, so callers can omit it.
    """
    if not conditions:
        return "", []

    clause = ""
    values = []

    for key, value in conditions.items():
        if value is None:
            fragment = key.strip()
        else:
            fragment = render_condition(key)
            values.append(value)

        if not clause:
            clause = fragment
        elif starts_with_joiner(fragment):
            clause = f"{clause} {fragment}"
        else:
            clause = f"{clause} AND {fragment}"

    return f"WHERE {clause}", values
