"""
Type environment

Immutable, parent-linked mapping from variable names to types.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from tt_types import Type, Param


@dataclass(frozen=True)
class TypeEnv:
    """
    One scope of bindings plus a link to the enclosing scope.

    Extending never touches the receiver: each scope-introducing construct
    gets a fresh TypeEnv whose parent is the environment it was given, so
    bindings cannot leak past the construct that introduced them.
    Lookups search innermost-first, which gives shadowing for free.
    """
    bindings: Mapping[str, Type] = field(default_factory=dict)
    parent: Optional[TypeEnv] = None

    @staticmethod
    def empty() -> TypeEnv:
        return _EMPTY_ENV

    @staticmethod
    def of(bindings: Mapping[str, Type]) -> TypeEnv:
        """Top-level environment with the given bindings (copied)."""
        return TypeEnv(dict(bindings))

    def extend(self, name: str, ty: Type) -> TypeEnv:
        return TypeEnv({name: ty}, self)

    def extend_params(self, params: Iterable[Param]) -> TypeEnv:
        scope: Dict[str, Type] = {}
        for param in params:
            # a later duplicate parameter wins, like repeated assignment
            scope[param.name] = param.type
        return TypeEnv(scope, self)

    def lookup(self, name: str) -> Optional[Type]:
        env: Optional[TypeEnv] = self
        while env is not None:
            ty = env.bindings.get(name)
            if ty is not None:
                return ty
            env = env.parent
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def names(self) -> List[str]:
        """All visible names, innermost scope first, each name once."""
        seen: List[str] = []
        env: Optional[TypeEnv] = self
        while env is not None:
            for name in env.bindings:
                if name not in seen:
                    seen.append(name)
            env = env.parent
        return seen

    def depth(self) -> int:
        count = 0
        env = self.parent
        while env is not None:
            count += 1
            env = env.parent
        return count


_EMPTY_ENV = TypeEnv()
