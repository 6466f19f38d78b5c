# chilang

A small, experimental programming language: a parser that builds an
expression tree from source text, and a simulator that walks that tree.
A tiny register-style virtual machine over 64-bit integers (`chilang.vm`)
is included as a separate piece.

## Installation

```
pip install .
```

## Running a program

The `chilang` command reads a program from standard input. On standard
error it writes a `chilang WIP` banner, the parse time in milliseconds,
the text form of the parsed tree and finally `sim code: N`. Output of
`print` goes to standard output.

```
echo "u8 x; x = 5; print x;" | chilang
```

prints `(u8)05` on standard output.

The command takes no options besides `--help`. It exits with status 1 if
parsing fails, reporting the error as `path:line:column: message` (the
path is `stdin`), and with status 0 otherwise.

## The language

- A declaration is a type name followed by a new identifier: `u8 x;`.
  The built-in type names are `namespace`, `alias`, `interface`,
  `template`, `struct`, `union`, `type`, `auto`, `any`, `void`, `bool`,
  `u8`, `u32`, `i8` and `i32`.
- Assignment uses `=`: `x = 5;`. Numeric literals are decimal, at most
  8 digits long, and may only be assigned to the unsigned types `u8` and
  `u32`; a value that does not fit the member's type is an error.
- `print expr;` evaluates the expression and writes its type and its raw
  bytes in upper-case hexadecimal, for example `(u8)05`; a member that was
  never assigned prints `(null)`.
- `true` and `false` are `bool` literals (`(bool)01` and `(bool)00`).
- `{ ... }` opens a nested block with its own scope; names declared
  inside shadow outer ones.
- An expression ends with `;` or `)`, or before a closing `}`.
- Tokens are runs of ASCII letters, digits and the symbols
  `~!@#$%^&*_+-=/<>?`, at most 16 characters long.

## Using it from Python

```python
from chilang.members import MemberList, init_global_frame
from chilang.parser import Parser
from chilang.simulator import Simulator
from chilang.streams import StringInStream, StringOutStream
from chilang.expressions import render

frame = init_global_frame(MemberList())
tree = Parser(frame).parse_unit(StringInStream("u32 n; n = 300; print n;"), "example")
out = StringOutStream()
Simulator(frame, os_stdout=out).evaluate(tree)
print(out.getvalue())   # (u32)2C010000
print(render(tree))
```

Modules:

- `chilang.parser` — `Parser` (`parse_unit`, `parse_frame`,
  `parse_expression`, `read_token`, …), `ParserFrame` scopes, and
  `convert_numeric_literal`.
- `chilang.parser_errors` — `ParserError`, raised with a `ParserCode`
  and the position it was found at.
- `chilang.parser_stream` — `ParserInStream`, a push-back stream that
  tracks line and column.
- `chilang.parser_chars` — the character classes the parser uses.
- `chilang.simulator` — `Simulator.evaluate` runs a parsed tree over
  `SimFrame`s of `SimValue`s; failures raise `SimulationError` carrying a
  `SimCode`.
- `chilang.members` — `MemberList` scopes, `Member`, `AnyMemberMatcher`
  and `init_global_frame`, which registers the built-in type names.
- `chilang.types` — primitive, pointer, qualifier and callable types,
  `EqualTypeMatcher` and `SmartTypeMatcher`.
- `chilang.objects` — keyword and type objects bound to members.
- `chilang.expressions` — the expression tree; `render` gives an
  expression's text form.
- `chilang.streams` — `StringInStream`, `FileInStream`,
  `StringOutStream`, `FileOutStream`, `DelimOutStream` and
  `std_streams()`.
- `chilang.multimap` — `MultiMap`, a mapping keeping several values per
  key, newest first.
- `chilang.vm` — `VmInstance.execute_procedure` runs a `Procedure` of
  `Operation`s (arithmetic, comparisons, jumps, copies, calls, printing)
  over a byte frame of little-endian 64-bit integers.

## Limitations

- The keywords `if` and `else` are reserved but not parsed; using them is
  a "Unexpected token" error. `fn` currently parses as `true`.
- Signed types (`i8`, `i32`) and `bool` cannot be given numeric literals.
- Evaluation errors inside a block end that block quietly, so a program
  run by the `chilang` command reports `sim code: 0` in practice.
- Nothing compiles programs to the virtual machine; `chilang.vm` is only
  usable by building `Procedure`s by hand.

## Tests

```
pip install ".[test]"
pytest
```