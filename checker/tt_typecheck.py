#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from tt_ast import (
    Node, Term, TrueLiteral, FalseLiteral, NumberLiteral, IfExpr, AddExpr, VarRef, FuncExpr, CallExpr,
    ObjectNewExpr, ObjectGetExpr, SeqExpr, ConstDecl, RecFuncDecl)
from tt_context import CheckerContext, LogLevel
from tt_env import TypeEnv
from tt_internal_error import InternalCheckerError
from tt_logger import log_enabled, log_trace
from tt_relations import type_eq, is_subtype
from tt_types import (
    Type,
    BooleanType,
    NumberType,
    FuncType,
    ObjectType,
    PropertyType,
    get_boolean_type,
    get_number_type,
    make_func_type,
    make_object_type,
    format_type, )


# Term type checking for tinyts


@dataclass
class TypeCheckError(Exception):
    """A static type error: `[TYP-xxxx]` message plus the offending node, if known."""
    message: str
    node: Optional[Node] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class TypeChecker:
    """Recursive type checker for tinyts terms.

    Implements:
      - Literals, conditionals and addition over booleans and numbers
      - Variables, looked up in a persistent TypeEnv
      - Functions (declared or inferred return type), calls with arity and
        argument checking
      - Recursive functions and function-valued `const` with eagerly built
        signatures so the name is visible to its own body / continuation
      - Sequencing and local `const` bindings
      - Object literals and property access

    Checking is fail-fast: the first error raises TypeCheckError and no
    partial type is produced. The checker keeps no per-call state, so one
    instance may check several terms, from several threads.
    """
    context: CheckerContext = field(default_factory=CheckerContext.default)
    filename: Optional[str] = None

    def __post_init__(self) -> None:
        # Cached primitive types
        self.boolean_type: BooleanType = get_boolean_type()
        self.number_type: NumberType = get_number_type()

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    def check(self, term: Term, env: Union[TypeEnv, Mapping[str, Type], None] = None) -> Type:
        """Type-check `term` against `env` (empty when omitted) and return its type."""
        if env is None:
            env = TypeEnv.empty()
        elif not isinstance(env, TypeEnv):
            env = TypeEnv.of(env)
        return self._infer(term, env, 0)

    # ------------------------------------------------------------------
    # Term typing
    # ------------------------------------------------------------------

    def _infer(self, term: Term, env: TypeEnv, depth: int) -> Type:
        # `depth` only indents debug traces
        tracing = log_enabled(self.context, LogLevel.DEBUG)
        if tracing:
            log_trace(self.context, depth, type(term).__name__)
        result = self._infer_term(term, env, depth)
        if tracing:
            log_trace(self.context, depth, f"{type(term).__name__} : {format_type(result)}")
        return result

    def _infer_term(self, term: Term, env: TypeEnv, depth: int) -> Type:
        if isinstance(term, (TrueLiteral, FalseLiteral)):
            return self.boolean_type

        if isinstance(term, NumberLiteral):
            return self.number_type

        if isinstance(term, IfExpr):
            return self._infer_if(term, env, depth)

        if isinstance(term, AddExpr):
            return self._infer_add(term, env, depth)

        if isinstance(term, VarRef):
            return self._infer_var_ref(term, env)

        if isinstance(term, FuncExpr):
            return self._infer_func(term, env, depth)

        if isinstance(term, RecFuncDecl):
            return self._infer_rec_func(term, env, depth)

        if isinstance(term, CallExpr):
            return self._infer_call(term, env, depth)

        if isinstance(term, SeqExpr):
            self._infer(term.body, env, depth + 1)
            return self._infer(term.rest, env, depth + 1)

        if isinstance(term, ConstDecl):
            return self._infer_const(term, env, depth)

        if isinstance(term, ObjectNewExpr):
            return self._infer_object_new(term, env, depth)

        if isinstance(term, ObjectGetExpr):
            return self._infer_object_get(term, env, depth)

        raise InternalCheckerError("[ICE-0001] not implemented: no typing rule", term, self.filename)

    def _infer_if(self, term: IfExpr, env: TypeEnv, depth: int) -> Type:
        cond_ty = self._infer(term.cond, env, depth + 1)
        if not isinstance(cond_ty, BooleanType):
            self._error(term.cond, f"[TYP-0010] boolean expected, got '{format_type(cond_ty)}'")
        thn_ty = self._infer(term.thn, env, depth + 1)
        els_ty = self._infer(term.els, env, depth + 1)
        if not type_eq(thn_ty, els_ty):
            self._error(
                term,
                "[TYP-0011] then and else must have the same type: "
                f"'{format_type(thn_ty)}' vs '{format_type(els_ty)}'",
            )
        return thn_ty

    def _infer_add(self, term: AddExpr, env: TypeEnv, depth: int) -> Type:
        for operand in (term.left, term.right):
            operand_ty = self._infer(operand, env, depth + 1)
            if not isinstance(operand_ty, NumberType):
                self._error(operand, f"[TYP-0020] number expected, got '{format_type(operand_ty)}'")
        return self.number_type

    def _infer_var_ref(self, term: VarRef, env: TypeEnv) -> Type:
        ty = env.lookup(term.name)
        if ty is None:
            self._error(term, f"[TYP-0030] undefined variable: {term.name}")
        return ty

    def _infer_func(self, term: FuncExpr, env: TypeEnv, depth: int) -> Type:
        body_ty = self._infer(term.body, env.extend_params(term.params), depth + 1)
        if term.ret_type is None:
            return make_func_type(term.params, body_ty)
        if not type_eq(body_ty, term.ret_type):
            self._error(
                term,
                "[TYP-0040] return type mismatch: "
                f"expected '{format_type(term.ret_type)}', got '{format_type(body_ty)}'",
            )
        return make_func_type(term.params, term.ret_type)

    def _infer_rec_func(self, term: RecFuncDecl, env: TypeEnv, depth: int) -> Type:
        func_ty = make_func_type(term.params, term.ret_type)

        # Body sees the parameters and the function itself; the name wins over a same-named parameter.
        body_env = env.extend_params(term.params).extend(term.func_name, func_ty)
        body_ty = self._infer(term.body, body_env, depth + 1)
        if not type_eq(term.ret_type, body_ty):
            self._error(
                term,
                f"[TYP-0041] wrong return type for '{term.func_name}': "
                f"expected '{format_type(term.ret_type)}', got '{format_type(body_ty)}'",
            )

        # Parameters stay local to the definition.
        return self._infer(term.rest, env.extend(term.func_name, func_ty), depth + 1)

    def _infer_call(self, term: CallExpr, env: TypeEnv, depth: int) -> Type:
        func_ty = self._infer(term.func, env, depth + 1)
        if not isinstance(func_ty, FuncType):
            self._error(term.func, f"[TYP-0050] function expected, got '{format_type(func_ty)}'")
        if len(func_ty.params) != len(term.args):
            self._error(
                term,
                f"[TYP-0051] wrong number of arguments: expected {len(func_ty.params)}, got {len(term.args)}",
            )
        for param, arg in zip(func_ty.params, term.args):
            arg_ty = self._infer(arg, env, depth + 1)
            if not self._arg_compatible(param.type, arg_ty):
                self._error(
                    arg,
                    f"[TYP-0052] argument type mismatch for parameter '{param.name}': "
                    f"expected '{format_type(param.type)}', got '{format_type(arg_ty)}'",
                )
        return func_ty.ret_type

    def _arg_compatible(self, param_ty: Type, arg_ty: Type) -> bool:
        if self.context.call_subtyping:
            return is_subtype(arg_ty, param_ty)
        return type_eq(param_ty, arg_ty)

    def _infer_const(self, term: ConstDecl, env: TypeEnv, depth: int) -> Type:
        init = term.init
        if not isinstance(init, FuncExpr):
            init_ty = self._infer(init, env, depth + 1)
            return self._infer(term.rest, env.extend(term.name, init_ty), depth + 1)

        if init.ret_type is None:
            self._error(init, f"[TYP-0042] return type is required for function '{term.name}'")
        func_ty = make_func_type(init.params, init.ret_type)
        rest_ty = self._infer(term.rest, env.extend(term.name, func_ty), depth + 1)

        # NOTE: the declared return type is compared with the type of the
        # continuation, not with the function body; the body is not checked here.
        if not type_eq(init.ret_type, rest_ty):
            self._error(
                term,
                f"[TYP-0041] wrong return type for '{term.name}': "
                f"expected '{format_type(init.ret_type)}', got '{format_type(rest_ty)}'",
            )
        return rest_ty

    def _infer_object_new(self, term: ObjectNewExpr, env: TypeEnv, depth: int) -> Type:
        props = []
        seen = set()
        for prop in term.props:
            if prop.name in seen:
                self._error(prop, f"[TYP-0062] duplicate property name: {prop.name}")
            seen.add(prop.name)
            # siblings are not in scope: every property is checked in `env`
            props.append(PropertyType(prop.name, self._infer(prop.term, env, depth + 1)))
        return make_object_type(props)

    def _infer_object_get(self, term: ObjectGetExpr, env: TypeEnv, depth: int) -> Type:
        obj_ty = self._infer(term.obj, env, depth + 1)
        if not isinstance(obj_ty, ObjectType):
            self._error(term.obj, f"[TYP-0060] object type expected, got '{format_type(obj_ty)}'")
        prop_ty = obj_ty.find_prop(term.prop_name)
        if prop_ty is None:
            self._error(
                term,
                f"[TYP-0061] unknown property name: {term.prop_name} (in '{format_type(obj_ty)}')",
            )
        return prop_ty

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _error(self, node: Optional[Node], message: str) -> None:
        raise TypeCheckError(message, node)


def typecheck(
        term: Term,
        env: Union[TypeEnv, Mapping[str, Type], None] = None,
        context: Optional[CheckerContext] = None,
) -> Type:
    """Type-check `term` from scratch; raises TypeCheckError on the first error."""
    checker = TypeChecker(context=context or CheckerContext.default())
    return checker.check(term, env)
