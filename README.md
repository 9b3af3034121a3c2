# treeedb

treeedb turns syntax trees into relational facts that a Datalog engine such
as Soufflé can load, and generates the matching Soufflé type and relation
declarations from a tree-sitter `node-types.json` description.

There are two halves:

* **Fact extraction** walks a syntax tree and writes three CSV relations:
  `node.csv` (one row per node: id, kind, the flags `is_named`, `is_extra`,
  `is_error` and `is_missing` as `true`/`false`, start and end byte, start
  row and column, end row and column, and the node's text with newlines
  written as `\n`), `field.csv` (parent id, field name, child id) and
  `child.csv` (parent id, named child id).
* **Declaration generation** reads a grammar's node types and writes a
  Soufflé program that declares a type and a relation for every named node
  kind, one relation per field and per child kind, and the `node`, `field`
  and `child` input relations that read the CSV files above.

## Installation

```
pip install treeedb
```

No third-party libraries are required.

## Generating Soufflé declarations

From Python:

```python
import io
from pathlib import Path

from treeedb.souffle import GenConfig, gen

node_types = Path("node-types.json").read_text()
out = io.StringIO()
gen(GenConfig(printsize=True, prefix="rust"), out, node_types)
print(out.getvalue())
```

With a prefix of `rust`, relations are named `rust_node`, `rust_field`,
`rust_child`, `rust_function_item`, `rust_function_item_name_f` and so on,
while types receive the upper-camel-case prefix (`RustNode`,
`RustFunctionItem`, ...). Setting `printsize` adds a `.printsize` directive
for each relation. Malformed node-type JSON, a named node type that has both
subtypes and fields, and write failures raise `GenError`.

`treeedb.nodetypes.nodes` parses a `node-types.json` document into `Node`,
`Field` and `Subtype` objects (raising `ValueError` if it is malformed) if
you want to inspect a grammar yourself, and
`treeedb.souffle.to_upper_camel_case` is the name conversion used for types.

The same generator is available as a command:

```
treeedbgen-souffle --prefix rust --printsize -o rust.dl node-types.json
```

Options:

* `NODE_TYPES` — path of the `node-types.json` file; read from standard
  input if omitted or `-`.
* `--printsize` — emit `.printsize` directives.
* `-o`, `--output FILE` — write to `FILE` instead of standard output.
* `-p`, `--prefix PREFIX` — prefix for generated declarations.

The command exits with status 1 and a message on standard error if the input
cannot be read, the output cannot be written, or generation fails.

## Extracting facts

Fact extraction works on any tree described with `treeedb.consumer.SyntaxTree`
and `SyntaxNode`. A `SyntaxNode` carries its id, kind, flags, byte range,
start and end points, the grammar field it sits under in its parent (if any)
and its children. Facts are passed to a `FactConsumer`; the bundled
`WideCsvConsumer` writes the three CSV files:

```python
from treeedb.facts import facts
from treeedb.wide import WideCsvConsumer

with WideCsvConsumer("node.csv", "field.csv", "child.csv") as consumer:
    facts(consumer, source_bytes, tree)
```

`facts` visits nodes depth first, following named children only. Writing a
node whose text is not valid UTF-8 raises `UnicodeDecodeError`.

`NarrowCsvConsumer` creates a directory if needed and writes a single
`node_id.csv` into it, with one row per node holding its id twice.

`treeedb.cli.run(parse, argv)` drives the whole process for a command-line
front end: give it a function that turns source text into a `SyntaxTree`,
plus the arguments. It writes `node.csv`, `field.csv` and `child.csv` in the
current directory. Source files are read from the arguments, or from
standard input when there are none, and `--on-parse-error` chooses between
`ignore`, `warn` (the default, a warning on standard error) and `error`.
`run` returns the exit status: 0 on success, 1 when a file cannot be read or
when, in `error` mode, a tree contains parse errors.
`handle_parse_errors(path, tree, on_parse_error)` applies the same policy to a
single tree and raises `ParseErrorAbort` in `error` mode.

Load the resulting CSV files by running Soufflé on the generated program in
the same directory.

## What this package does not do

* It contains no parser and no grammars. Turning source code into a
  `SyntaxTree` is left to the caller, so there is no ready-made command for
  fact extraction; `treeedb.cli.run` must be given a parse function.
* It does not ship any `node-types.json` files; the generator needs one to be
  supplied.
* It does not run Soufflé.