#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Script file commands: disassemble, assemble and compile.

The actual disassembler, assembler and compilers are supplied by the host
as plain callables; this module only handles files, naming and errors.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .commands import BadCommand, CommandDispatcher
from .core.store import LogKind
from .debug import log_operation

SCRIPT_EXTENSION = ".pvm"
ASSEMBLY_EXTENSION = ".asm"


@dataclass
class Toolchain:
    """Opaque code generation stages.

    ``assembler`` turns source lines into parsed entries and ``emit`` turns
    those entries into script bytes, so both failure kinds stay distinct.
    """

    disassembler: Optional[Callable[[bytes], Iterable[Any]]] = None
    assembler: Optional[Callable[[List[str]], Iterable[Any]]] = None
    emit: Optional[Callable[[List[Any]], bytes]] = None
    compilers: Dict[str, Callable[[str], bytes]] = field(default_factory=dict)


def _input_path(args: List[str]) -> Path:
    if not args:
        raise BadCommand("Could not obtain input filename")
    return Path(args[0])


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise BadCommand(f"Error reading {path}") from exc


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BadCommand(f"Error reading {path}") from exc


def _write(path: Path, payload) -> None:
    try:
        if isinstance(payload, bytes):
            path.write_bytes(payload)
        else:
            path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise BadCommand(f"Error generating {path}") from exc


class ScriptModule:
    def __init__(self, toolchain: Toolchain, write: Callable[[LogKind, str], None]):
        self.toolchain = toolchain
        self.write = write

    def _stage(self, stage: Optional[Callable], name: str) -> Callable:
        if stage is None:
            raise BadCommand(f"No {name} configured")
        return stage

    def disassemble_file(self, args: List[str]) -> None:
        source = _input_path(args)
        if source.suffix != SCRIPT_EXTENSION:
            raise BadCommand(f"Only {SCRIPT_EXTENSION} format supported!")
        disassemble = self._stage(self.toolchain.disassembler, "disassembler")

        output = source.with_suffix(ASSEMBLY_EXTENSION)
        script = _read_bytes(source)
        lines = [str(instruction) for instruction in disassemble(script)]
        _write(output, "\n".join(lines) + "\n" if lines else "")

        log_operation("disassemble", "script", {"source": str(source), "lines": len(lines)})
        self.write(LogKind.SUCCESS, f"Disassembled {source} to {output}")

    def assemble_file(self, args: List[str]) -> None:
        source = _input_path(args)
        assemble = self._stage(self.toolchain.assembler, "assembler")
        emit = self._stage(self.toolchain.emit, "script emitter")

        lines = _read_text(source).splitlines()
        try:
            entries = list(assemble(lines))
        except Exception as exc:
            raise BadCommand(f"Error parsing {source} :{exc}") from exc

        try:
            for entry in entries:
                self.write(LogKind.MESSAGE, str(entry))
            script = emit(entries)
        except Exception as exc:
            raise BadCommand(f"Error assembling {source} :{exc}") from exc

        output = source.with_suffix(SCRIPT_EXTENSION)
        _write(output, script)
        self.write(LogKind.SUCCESS, f"Assembled {source} to {output}")

    def compile_file(self, args: List[str]) -> None:
        source = _input_path(args)
        extension = source.suffix
        if not self.toolchain.compilers:
            raise BadCommand("No compiler configured")
        compiler = self.toolchain.compilers.get(extension)
        if compiler is None:
            raise BadCommand(f"Unsupported smart contract language extension: {extension}")

        # Compiler failures propagate and are reported as errors.
        script = compiler(_read_text(source))

        output = source.with_suffix(SCRIPT_EXTENSION)
        _write(output, script)
        self.write(LogKind.SUCCESS, f"Compiled {source} to {output}")

    def register(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.register_module(
            "script",
            {
                "disassemble": self.disassemble_file,
                "assemble": self.assemble_file,
                "compile": self.compile_file,
            },
            {
                "disassemble": f"Disassemble a {SCRIPT_EXTENSION} file to {ASSEMBLY_EXTENSION}",
                "assemble": f"Assemble a source file to {SCRIPT_EXTENSION}",
                "compile": f"Compile a contract source to {SCRIPT_EXTENSION}",
            },
        )
