"""Make fragment writer driven as a forward-only state machine."""

from __future__ import annotations

from enum import Enum
from typing import TextIO

from fixdep.errors import FixdepError


class EmitterState(Enum):
    """Stages of a single fragment write."""

    START = "start"
    HEADER_WRITTEN = "header_written"
    PREREQ_BLOCK_OPEN = "prereq_block_open"
    PREREQ_BLOCK_CLOSED = "prereq_block_closed"
    DONE = "done"


class EmitterStateError(FixdepError):
    """Raised when fragment sections are written out of order."""

    def __init__(self, operation: str, state: EmitterState) -> None:
        super().__init__(f"Cannot {operation} while emitter is in state '{state.value}'.")
        self.operation = operation
        self.state = state


class FragmentEmitter:
    """Streams the savedcmd/deps/rule fragment for one target."""

    def __init__(self, target: str, out_stream: TextIO) -> None:
        self._target = target
        self._out = out_stream
        self._state = EmitterState.START
        self._lines_written = 0

    @property
    def state(self) -> EmitterState:
        return self._state

    @property
    def target(self) -> str:
        return self._target

    @property
    def lines_written(self) -> int:
        """Number of prerequisite and wildcard lines inside deps_<target>."""
        return self._lines_written

    def write_header(self) -> None:
        self._require("write header", EmitterState.START)
        target = self._target
        self._out.write(f"savedcmd_{target} := $(cmd_{target})\n\n")
        self._out.write(f"deps_{target} := \\\n")
        self._state = EmitterState.HEADER_WRITTEN

    def write_prerequisite(self, path: str) -> None:
        self._open_block("write prerequisite")
        self._out.write(f"  {path} \\\n")
        self._lines_written += 1

    def write_config_dependency(self, symbol: str) -> None:
        self._open_block("write config dependency")
        self._out.write(f"    $(wildcard include/config/{symbol}) \\\n")
        self._lines_written += 1

    def close(self) -> None:
        """Terminate deps_<target> and write the target and phony rules."""
        self._open_block("close prerequisite block")
        target = self._target
        self._out.write(f"\n{target}: $(deps_{target})\n\n")
        self._out.write(f"$(deps_{target}):\n")
        self._state = EmitterState.PREREQ_BLOCK_CLOSED

    def finish(self) -> None:
        self._require("finish", EmitterState.PREREQ_BLOCK_CLOSED)
        self._out.flush()
        self._state = EmitterState.DONE

    def _open_block(self, operation: str) -> None:
        if self._state is EmitterState.HEADER_WRITTEN:
            self._state = EmitterState.PREREQ_BLOCK_OPEN
            return
        self._require(operation, EmitterState.PREREQ_BLOCK_OPEN)

    def _require(self, operation: str, expected: EmitterState) -> None:
        if self._state is not expected:
            raise EmitterStateError(operation=operation, state=self._state)
