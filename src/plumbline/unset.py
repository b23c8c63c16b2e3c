"""The ``UNSET`` sentinel: a value that was never provided."""

from __future__ import annotations


class _Unset:
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __str__(self) -> str:
        return "undefined"

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _Unset()
