from __future__ import annotations

import typing as t

T = t.TypeVar("T")


class Once(t.Generic[T]):
    """Calls a supplier on first access and returns the cached value from then on. Used to load configuration and
    locate files lazily, as not every code path needs them. A supplier that raises is called again on the next
    access."""

    def __init__(self, supplier: t.Callable[[], T]) -> None:
        self._supplier = supplier
        self._cached = False
        self._value: T | None = None

    def __repr__(self) -> str:
        return f"Once({self._supplier!r})"

    def __call__(self) -> T:
        if not self._cached:
            self._value = self._supplier()
            self._cached = True
        return t.cast(T, self._value)
