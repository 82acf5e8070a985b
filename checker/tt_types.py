#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Optional, Tuple

# ========================================
# The semantic type system for tinyts.
# ========================================

class Type:
    """
    Base class for all semantic types.
    Used only as a common marker; concrete types are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class BooleanType(Type):
    pass


@dataclass(frozen=True)
class NumberType(Type):
    pass


@dataclass(frozen=True)
class Param:
    name: str
    type: Type


@dataclass(frozen=True)
class FuncType(Type):
    """
    Function type. `==` also compares parameter names; use
    `tt_relations.type_eq` for type identity, which ignores them.
    """
    params: Tuple[Param, ...]
    ret_type: Type


@dataclass(frozen=True)
class PropertyType:
    name: str
    type: Type


@dataclass(frozen=True)
class ObjectType(Type):
    # `==` is order-sensitive over `props`; `type_eq` is not.
    props: Tuple[PropertyType, ...]

    def find_prop(self, name: str) -> Optional[Type]:
        for prop in self.props:
            if prop.name == name:
                return prop.type
        return None


# --- helpers for primitives ---

_BOOLEAN_TYPE = BooleanType()
_NUMBER_TYPE = NumberType()


def get_boolean_type() -> BooleanType:
    return _BOOLEAN_TYPE


def get_number_type() -> NumberType:
    return _NUMBER_TYPE


def make_func_type(params, ret_type: Type) -> FuncType:
    """Build a FuncType from any iterable of Params (lists from the parser included)."""
    return FuncType(tuple(params), ret_type)


def make_object_type(props) -> ObjectType:
    return ObjectType(tuple(props))


# --- type stringification for diagnostics ---

def format_type(t: Optional[Type]) -> str:
    if t is None:
        return "<none>"
    elif isinstance(t, BooleanType):
        return "boolean"
    elif isinstance(t, NumberType):
        return "number"
    elif isinstance(t, FuncType):
        params_str = ", ".join(f"{p.name}: {format_type(p.type)}" for p in t.params)
        return f"({params_str}) => {format_type(t.ret_type)}"
    elif isinstance(t, ObjectType):
        if not t.props:
            return "{}"
        props_str = "; ".join(f"{p.name}: {format_type(p.type)}" for p in t.props)
        return f"{{ {props_str} }}"
    else:
        # Fallback (should not happen)
        return repr(t)
