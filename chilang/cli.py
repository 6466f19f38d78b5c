"""Command that parses a program from standard input and runs it."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence

from chilang.members import MemberList, init_global_frame
from chilang.parser import Parser
from chilang.parser_errors import ParserError
from chilang.simulator import SimCode, SimulationError, Simulator
from chilang.streams import std_streams


def _elapsed_millis(start: float) -> float:
    return (time.process_time() - start) * 1000.0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse standard input, show its tree on stderr and run it."""
    argparse.ArgumentParser(
        prog="chilang",
        description="Parse a program from standard input and run it.",
    ).parse_args(argv)

    streams = std_streams()
    log = streams.stderr
    log.write("chilang WIP\n")

    global_frame = init_global_frame(MemberList())
    parser = Parser(global_frame)

    start = time.process_time()
    error: Optional[ParserError] = None
    try:
        root = parser.parse_unit(streams.stdin, "stdin")
    except ParserError as exc:
        error = exc
    log.write(f"Parsing took {_elapsed_millis(start):.6f}ms\n")

    if error is not None:
        log.write(f"{error}\n")
        log.flush()
        return 1

    root.repr_to(log)
    log.write("\n")

    simulator = Simulator(global_frame, os_stdout=streams.stdout, log_stream=log)
    code = SimCode.OK
    try:
        simulator.evaluate(root)
    except SimulationError as exc:
        code = exc.code
    log.write(f"sim code: {int(code)}\n")

    streams.stdout.flush()
    log.flush()
    return 0 if code is SimCode.OK else 1


if __name__ == "__main__":
    sys.exit(main())