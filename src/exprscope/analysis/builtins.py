"""
Names that are never reported as required template inputs.
"""

# Values the render engine supplies to every expression
RENDER_CONTEXT_VARIABLES = frozenset(
    {
        "date",
        "dateTime",
        "currentPage",
        "totalPages",
    }
)

# Globals exposed to expressions by the evaluator
GLOBAL_OBJECTS = frozenset(
    {
        "Math",
        "String",
        "Number",
        "Boolean",
        "Array",
        "Object",
        "Date",
        "JSON",
        "isNaN",
        "parseFloat",
        "parseInt",
        "decodeURI",
        "decodeURIComponent",
        "encodeURI",
        "encodeURIComponent",
    }
)

# Deliberately wider than the evaluator globals: these read like variables but are never inputs
GLOBAL_VALUES = frozenset({"undefined", "NaN", "Infinity"})

BUILT_IN_VARIABLES = RENDER_CONTEXT_VARIABLES | GLOBAL_OBJECTS | GLOBAL_VALUES


def is_builtin(name: str, builtins: frozenset[str] = BUILT_IN_VARIABLES) -> bool:
    """Check whether a name is supplied by the render engine or the host globals."""
    return name in builtins
