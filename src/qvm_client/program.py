# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Minimal program builder.

A program is an ordered list of instruction strings. Instructions are
not parsed or validated; the remote service does that.

>>> p = Program("H 0").inst("CNOT 0 1", "MEASURE 0 [0]")
>>> print(p, end="")
H 0
CNOT 0 1
MEASURE 0 [0]
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union


InstructionLike = Union[str, "Program", Iterable[Union[str, "Program"]]]


class Program:
    """Ordered sequence of instruction strings."""

    def __init__(self, *instructions: InstructionLike) -> None:
        self._instructions: list[str] = []
        self.inst(*instructions)

    def inst(self, *instructions: InstructionLike) -> Program:
        """
        Append instructions and return ``self``.

        Accepts strings, other programs, or iterables of either.
        """
        for item in instructions:
            if isinstance(item, Program):
                self._instructions.extend(item._instructions)
            elif isinstance(item, str):
                self._instructions.append(item)
            elif isinstance(item, Iterable):
                self.inst(*item)
            else:
                raise TypeError(
                    f"Cannot add instruction of type {type(item).__name__}"
                )
        return self

    @property
    def instructions(self) -> tuple[str, ...]:
        return tuple(self._instructions)

    def out(self) -> str:
        """Render the program text sent to the service."""
        return "".join(f"{line}\n" for line in self._instructions)

    def __str__(self) -> str:
        return self.out()

    def __repr__(self) -> str:
        return f"Program({len(self)} instructions)"

    def __len__(self) -> int:
        return len(self._instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __add__(self, other: InstructionLike) -> Program:
        return Program(self, other)
