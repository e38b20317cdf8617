"""A small command-line argument parser for the subcommands.

Arguments are named options taking a value, repeatable options, flags,
positionals and one trailing positional that takes everything left over.
Every parser knows ``-h/--help`` and ``-v/--version``.
"""

from __future__ import annotations

import enum
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

CAPACITY = 256


class ArgumentKind(enum.Enum):
    """How an argument is written on the command line."""

    VALUE = "value"
    FLAG = "flag"
    POSITIONAL = "positional"
    POSITIONAL_REST = "positional_rest"
    VALUE_ARRAY = "value_array"


class ArgumentError(Exception):
    """Raised when a parser is misconfigured or the command line is invalid."""


@dataclass(frozen=True)
class ArgumentSpec:
    """Declaration of one argument."""

    short_name: str | None
    long_name: str | None
    description: str = ""
    kind: ArgumentKind = ArgumentKind.VALUE
    required: bool = False


@dataclass
class _Slot:
    spec: ArgumentSpec
    value: str | None = None
    flag: bool = False
    values: list[str] = field(default_factory=list)

    def reset(self) -> None:
        self.value = None
        self.flag = False
        self.values = []


class ArgumentParser:
    """Parser for one command; ``argv[0]`` is taken to be the command name."""

    def __init__(self, name: str, description: str, version: str) -> None:
        self.name = name
        self.description = description
        self.version = version
        self._slots: list[_Slot] = []
        self.add_argument(
            "v", "version", "print the program version", ArgumentKind.FLAG, False
        )
        self.add_argument(
            "h", "help", "print this help message", ArgumentKind.FLAG, False
        )

    @property
    def arguments(self) -> tuple[ArgumentSpec, ...]:
        """The declared arguments, in the order they were added."""
        return tuple(slot.spec for slot in self._slots)

    def add_argument(
        self,
        short_name: str | None,
        long_name: str | None,
        description: str = "",
        kind: ArgumentKind = ArgumentKind.VALUE,
        required: bool = False,
    ) -> ArgumentSpec:
        """Declare an argument and return its specification."""
        if len(self._slots) >= CAPACITY:
            raise ArgumentError("Maximum number of arguments exceeded")
        if not isinstance(kind, ArgumentKind):
            raise ArgumentError(f"unknown argument type: {kind!r}")
        spec = ArgumentSpec(short_name or None, long_name, description, kind, bool(required))
        self._slots.append(_Slot(spec))
        return spec

    def _validate(self) -> None:
        found_optional_positional = False
        found_rest = False
        for index, slot in enumerate(self._slots):
            spec = slot.spec
            if spec.kind is ArgumentKind.POSITIONAL and found_rest:
                raise ArgumentError(
                    f"positional argument after positional rest: {spec.long_name}"
                )
            if spec.kind is ArgumentKind.POSITIONAL_REST:
                if found_rest:
                    raise ArgumentError(
                        f"multiple positional rest arguments: {spec.long_name}"
                    )
                found_rest = True
            if spec.kind is ArgumentKind.POSITIONAL and not spec.required:
                found_optional_positional = True
            if spec.short_name is None and spec.long_name is None:
                raise ArgumentError(
                    f"no short_name and long_name for argument {index}"
                )
            if spec.kind is ArgumentKind.FLAG and spec.required:
                raise ArgumentError(
                    f"flag argument cannot be required: {spec.long_name}"
                )
            if (
                spec.kind is ArgumentKind.POSITIONAL
                and spec.required
                and found_optional_positional
            ):
                raise ArgumentError(
                    f"required positional argument after optional: {spec.long_name}"
                )

    def _check_required(self) -> None:
        for slot in self._slots:
            spec = slot.spec
            if not spec.required:
                continue
            if spec.kind is ArgumentKind.POSITIONAL and slot.value is None:
                raise ArgumentError(
                    f"missing required positional argument: {spec.long_name}"
                )
            if spec.kind is ArgumentKind.VALUE and slot.value is None:
                raise ArgumentError(f"missing required argument: --{spec.long_name}")
            if spec.kind is ArgumentKind.VALUE_ARRAY and not slot.values:
                raise ArgumentError(f"missing required argument: --{spec.long_name}")
            if spec.kind is ArgumentKind.POSITIONAL_REST and not slot.values:
                raise ArgumentError(
                    f"missing required positional rest argument: {spec.long_name}"
                )

    def _option(self, token: str) -> _Slot:
        for slot in self._slots:
            spec = slot.spec
            if token.startswith("--"):
                if spec.long_name is not None and token[2:] == spec.long_name:
                    return slot
            elif spec.short_name is not None and token[1:2] == spec.short_name:
                return slot
        raise ArgumentError(f"unknown argument: {token}")

    def _positional(self, token: str) -> _Slot:
        for slot in self._slots:
            kind = slot.spec.kind
            if kind is ArgumentKind.POSITIONAL and slot.value is None:
                return slot
            if kind is ArgumentKind.POSITIONAL_REST:
                return slot
        raise ArgumentError(f"no positional argument available for: {token}")

    def parse(self, argv: Sequence[str]) -> None:
        """Parse ``argv``, skipping its first element.

        ``-h``/``--help`` and ``-v``/``--version`` print their text to
        standard output and raise ``SystemExit(0)``.
        """
        self._validate()
        for slot in self._slots:
            slot.reset()

        tokens = iter(list(argv)[1:])
        for token in tokens:
            if token in ("-h", "--help"):
                sys.stdout.write(self.help_text())
                raise SystemExit(0)
            if token in ("-v", "--version"):
                sys.stdout.write(self.version_text() + "\n")
                raise SystemExit(0)

            if token.startswith("-"):
                slot = self._option(token)
                kind = slot.spec.kind
                if kind is ArgumentKind.FLAG:
                    slot.flag = True
                elif kind in (ArgumentKind.VALUE, ArgumentKind.VALUE_ARRAY):
                    value = next(tokens, None)
                    if value is None:
                        raise ArgumentError(f"missing value for argument: {token}")
                    if kind is ArgumentKind.VALUE:
                        slot.value = value
                    else:
                        if len(slot.values) >= CAPACITY:
                            raise ArgumentError(
                                "Maximum number of values exceeded for argument"
                            )
                        slot.values.append(value)
                else:
                    raise ArgumentError(f"argument type not supported: {token}")
            else:
                slot = self._positional(token)
                if slot.spec.kind is ArgumentKind.POSITIONAL:
                    slot.value = token
                else:
                    if len(slot.values) >= CAPACITY:
                        raise ArgumentError(
                            "Maximum number of values exceeded for positional rest argument"
                        )
                    slot.values.append(token)

        self._check_required()

    def _find(self, name: str) -> _Slot | None:
        return next(
            (slot for slot in self._slots if slot.spec.long_name == name), None
        )

    def get_value(self, name: str, default: str | None = None) -> str | None:
        """Return the value given for ``name``, or ``default`` if there is none."""
        slot = self._find(name)
        if slot is None or slot.value is None:
            return default
        return slot.value

    def get_flag(self, name: str) -> bool:
        """Return whether the flag ``name`` was given."""
        slot = self._find(name)
        return slot.flag if slot is not None else False

    def get_values(self, name: str) -> list[str]:
        """Return the values collected for the repeatable or rest argument ``name``."""
        slot = self._find(name)
        if slot is None:
            raise KeyError(f"No values found for the given name: {name}")
        return list(slot.values)

    def help_text(self) -> str:
        """Return the usage and option summary."""
        specs = self.arguments
        usage = [f"usage: {self.name} [options]"]
        for spec in specs:
            if spec.kind is ArgumentKind.VALUE and spec.required:
                usage.append(f" -{_short(spec)} <{_long(spec)}>")
        for spec in specs:
            if spec.kind is ArgumentKind.POSITIONAL:
                usage.append(
                    f" <{_long(spec)}>" if spec.required else f" [{_long(spec)}]"
                )
        for spec in specs:
            if spec.kind is ArgumentKind.VALUE_ARRAY:
                usage.append(
                    f" -{_short(spec)} <{_long(spec)}>..."
                    if spec.required
                    else f" -{_short(spec)} [{_long(spec)}]..."
                )
        for spec in specs:
            if spec.kind is ArgumentKind.POSITIONAL_REST:
                usage.append(
                    f" <{_long(spec)}>..." if spec.required else f" [{_long(spec)}]..."
                )

        lines = ["".join(usage), self.description, "", "options:"]
        for spec in specs:
            short, long_ = _short(spec), _long(spec)
            if spec.kind in (ArgumentKind.POSITIONAL, ArgumentKind.POSITIONAL_REST):
                heading = f"  {short}, {long_}"
            elif spec.kind is ArgumentKind.FLAG:
                heading = f"  -{short}, --{long_}"
            elif spec.kind is ArgumentKind.VALUE:
                heading = f"  -{short}, --{long_} <value>"
            else:
                heading = f"  -{short}, --{long_} <value>..."
            lines.extend([heading, f"      {spec.description}", ""])
        return "\n".join(lines) + "\n"

    def version_text(self) -> str:
        """Return the program name followed by its version."""
        return f"{self.name} {self.version}"


def _short(spec: ArgumentSpec) -> str:
    return spec.short_name or ""


def _long(spec: ArgumentSpec) -> str:
    return spec.long_name or ""