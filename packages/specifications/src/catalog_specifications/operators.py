from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators of the query AST.

    Only operators that both the relational and the document store can
    evaluate server-side are defined; in particular there is no
    case-insensitive variant.
    """

    # Standard comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Set
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"

    # String (case-sensitive)
    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"
