##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Identifier escaping for table and column names.

Names are trimmed, lower-cased and wrapped in backticks. Table names may carry an
alias (`"users u"` or `"users as u"`), column names may carry a table alias prefix
(`"u.name"`) and/or a column alias (`"name as n"`). The wildcard and anything that
looks like a function call or a subquery (it contains an open parenthesis) are passed
through untouched.
"""

QUOTE = "`"
WILDCARD = "*"
ALIAS_SEPARATOR = " as "


def quote_identifier(identifier: str) -> str:
    """
    Wrap a single identifier in backticks, doubling any backtick it contains.

    Args:
        identifier: A bare identifier, e.g. "users".

    Returns:
        The quoted identifier, e.g. "`users`".
    """
    identifier = identifier.strip()
    return f"{QUOTE}{identifier.replace(QUOTE, QUOTE * 2)}{QUOTE}"


def _quote_aliased(expression: str, separator: str) -> str:
    base, alias = expression.split(separator, 1)
    return f"{quote_identifier(base)} AS {quote_identifier(alias)}"


def escape_table_name(table: str) -> str:
    """
    Escape and normalize a table name.

    Examples:
        >>> escape_table_name("Orders")
        '`orders`'
        >>> escape_table_name("users u")
        '`users` AS `u`'
        >>> escape_table_name("users AS u")
        '`users` AS `u`'

    Args:
        table: The table name, optionally followed by an alias.

    Returns:
        The escaped table expression.
    """
    normalized = table.strip().lower()

    if " " not in normalized:
        return quote_identifier(normalized)

    if ALIAS_SEPARATOR in normalized:
        return _quote_aliased(normalized, ALIAS_SEPARATOR)

    return _quote_aliased(normalized, " ")


def escape_column_name(column: str) -> str:
    """
    Escape and normalize a column name.

    Examples:
        >>> escape_column_name("*")
        '*'
        >>> escape_column_name("a.b")
        '`a`.`b`'
        >>> escape_column_name("a as x")
        '`a` AS `x`'
        >>> escape_column_name("COUNT(id) AS total")
        'COUNT(id) AS total'

    Args:
        column: The column expression.

    Returns:
        The escaped column expression.
    """
    if column.strip() == WILDCARD:
        return WILDCARD

    # Function calls and subqueries can't be escaped.
    if "(" in column:
        return column

    normalized = column.strip().lower()
    table_alias = ""

    if "." in normalized:
        alias, normalized = normalized.split(".", 1)
        table_alias = f"{quote_identifier(alias)}."
        normalized = normalized.strip()

    if normalized == WILDCARD:
        return f"{table_alias}{WILDCARD}"

    if ALIAS_SEPARATOR in normalized:
        return f"{table_alias}{_quote_aliased(normalized, ALIAS_SEPARATOR)}"

    return f"{table_alias}{quote_identifier(normalized)}"
