# MIT License (see LICENSE)
"""
Double dispatch on the runtime kinds of two operands.

A CrossCheck holds an ordered list of rules, each registered for a pair of
classes. check(a, b) walks the rules in registration order and runs the first
one whose classes match the operands (by isinstance, so subclasses match too).
If nothing matches, the fallback runs instead.

The same machinery specialises two things:
    - FunctionAdder: closed-form sums of pairs of monotonic function kinds.
    - InteractionSolver: event timing and resolution for pairs of bubble kinds.

Dispatch is direction sensitive. A rule for (A, B) does not fire for (B, A)
unless add_check_with_reverse() was used or both orders were registered.
More specific pairs must be registered before more general ones, since the
first match wins.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

R = TypeVar("R")

Handler = Callable[..., Any]


@dataclass(frozen=True)
class _Rule:
    kind_a: type
    kind_b: type
    handler: Handler

    def matches(self, a: Any, b: Any) -> bool:
        return isinstance(a, self.kind_a) and isinstance(b, self.kind_b)


def _no_result(a: Any, b: Any, *args: Any) -> None:
    return None


class CrossCheck(Generic[R]):
    """
    Ordered registry of (kind_a, kind_b) -> handler rules with a fallback.

    Handlers are called as handler(a, b, *args), where args are whatever extra
    positional arguments were passed to check().

    Example:
        sizes = CrossCheck(fallback=lambda a, b: 0)
        sizes.add_check(int, str, lambda n, s: n + len(s))
        sizes.check(2, "abc")   # 5
        sizes.check("abc", 2)   # 0, reverse order is not registered
    """

    def __init__(self, fallback: Callable[..., R] | None = None) -> None:
        """
        Args:
            fallback: Called with the same arguments as a handler when no rule
                      matches. Defaults to a function returning None.
        """
        self._rules: list[_Rule] = []
        self._fallback = fallback if fallback is not None else _no_result

    def add_check(self, kind_a: type, kind_b: type, handler: Callable[..., R]) -> None:
        """Register handler for operands that are instances of kind_a and kind_b."""
        self._rules.append(_Rule(kind_a, kind_b, handler))

    def add_check_with_reverse(self, kind_a: type, kind_b: type, handler: Callable[..., R]) -> None:
        """
        Register handler for (kind_a, kind_b) and again for (kind_b, kind_a).

        The reversed rule swaps the operands back before calling handler, so the
        handler always receives its kind_a operand first.
        """
        self.add_check(kind_a, kind_b, handler)
        self.add_check(kind_b, kind_a, lambda b, a, *args: handler(a, b, *args))

    def find(self, a: Any, b: Any) -> Handler | None:
        """Return the handler of the first matching rule, or None."""
        for rule in self._rules:
            if rule.matches(a, b):
                return rule.handler
        return None

    def handles(self, a: Any, b: Any) -> bool:
        """True iff some registered rule matches the operands."""
        return self.find(a, b) is not None

    def check(self, a: Any, b: Any, *args: Any) -> R:
        """Run the first matching rule, or the fallback when none match."""
        handler = self.find(a, b)
        if handler is None:
            return self._fallback(a, b, *args)
        return handler(a, b, *args)

    def __len__(self) -> int:
        return len(self._rules)
