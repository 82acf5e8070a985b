#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from tt_internal_error import InternalCheckerError
from tt_types import Type, BooleanType, NumberType, FuncType, ObjectType, format_type


# Structural relations between semantic types.
#
# Both relations dispatch on the second operand. Neither one looks at
# parameter names; object property order never matters.


def type_eq(ty1: Type, ty2: Type) -> bool:
    """Structural type equality."""
    if isinstance(ty2, BooleanType):
        return isinstance(ty1, BooleanType)

    if isinstance(ty2, NumberType):
        return isinstance(ty1, NumberType)

    if isinstance(ty2, FuncType):
        if not isinstance(ty1, FuncType):
            return False
        if len(ty1.params) != len(ty2.params):
            return False
        for p1, p2 in zip(ty1.params, ty2.params):
            if not type_eq(p1.type, p2.type):
                return False
        return type_eq(ty1.ret_type, ty2.ret_type)

    if isinstance(ty2, ObjectType):
        if not isinstance(ty1, ObjectType):
            return False
        if len(ty1.props) != len(ty2.props):
            return False
        for prop2 in ty2.props:
            prop1_ty = ty1.find_prop(prop2.name)
            if prop1_ty is None:
                return False
            if not type_eq(prop1_ty, prop2.type):
                return False
        return True

    raise InternalCheckerError(f"[ICE-0002] type_eq: unknown type {format_type(ty2)}")


def is_subtype(ty1: Type, ty2: Type) -> bool:
    """
    True when a value of type `ty1` may be used where `ty2` is expected.

    Objects: width (extra properties in `ty1` are fine) and depth (matching
    properties only need to be subtypes). Functions: same arity, parameters
    contravariant, return type covariant. Primitives only relate to themselves.
    """
    if isinstance(ty2, BooleanType):
        return isinstance(ty1, BooleanType)

    if isinstance(ty2, NumberType):
        return isinstance(ty1, NumberType)

    if isinstance(ty2, ObjectType):
        if not isinstance(ty1, ObjectType):
            return False
        for prop2 in ty2.props:
            prop1_ty = ty1.find_prop(prop2.name)
            if prop1_ty is None:
                return False
            if not is_subtype(prop1_ty, prop2.type):
                return False
        return True

    if isinstance(ty2, FuncType):
        if not isinstance(ty1, FuncType):
            return False
        if len(ty1.params) != len(ty2.params):
            return False
        for p1, p2 in zip(ty1.params, ty2.params):
            # reversed operands: parameters are contravariant
            if not is_subtype(p2.type, p1.type):
                return False
        return is_subtype(ty1.ret_type, ty2.ret_type)

    raise InternalCheckerError(f"[ICE-0002] is_subtype: unknown type {format_type(ty2)}")
