# jqtree

Building blocks for working with jq-style JSON queries in Python.

## Modules

- `jqtree.query` holds the abstract syntax tree of a query: `Query`, `Import`,
  `FuncDef`, `Term`, `Unary`, `Pattern`, `PatternObject`, `Index`, `Func`,
  `String`, `Object`, `ObjectKeyVal`, `Array`, `Suffix`, `Bind`, `If`,
  `IfElif`, `Try`, `Reduce`, `Foreach`, `Label`, and the constant nodes
  `ConstTerm`, `ConstObject`, `ConstObjectKeyVal` and `ConstArray`.
  - Every node is a dataclass, and `str()` renders it back to query text.
  - `minify()` walks a tree. It replaces a term without suffixes that is `.`,
    `..`, `null`, `true`, `false` or a call with no arguments by its name,
    which is stored in `Query.func`.
  - `to_index_key()` and `to_indices(xs)` extract constant index keys and
    paths, or return `None` where the path is not constant.
  - `to_value()` on the constant nodes gives plain Python values.
  - `to_number(text)` converts a numeric literal into an `int`, or into a
    `float` when it has a fraction or an exponent.
- `jqtree.preview` renders values as compact JSON with object keys sorted.
  - `encode_json(v)` gives the full encoding and `encode_string(s)` a quoted
    string.
  - `preview(v)` gives the encoding cut to at most 30 bytes. A preview that was
    cut ends in ` ..."`, ` ...]`, ` ...}` or ` ...`, depending on the type of
    the value.
  - NaN encodes as `null`, and infinities as the largest finite float.
- `jqtree.types` gives the jq type name of a value with `type_of`. It raises
  `TypeError` for anything other than `None`, `bool`, `int`, `float`, `str`,
  `list` or `dict`.
- `jqtree.stack` provides `Stack` and `ScopeStack`. Both are backtracking stacks:
  - `save()` returns a position and protects the entries below it.
  - `restore(index, limit)` returns to that position.
  - Popping an empty stack raises `IndexError`.
- `jqtree.term_type` defines the `TermType` enumeration. Its
  `go_string()` returns the qualified constant name, such as
  `jqtree.TermTypeIdentity`.

## Install

```
pip install .
```

## Examples

```python
from jqtree.preview import preview
from jqtree.types import type_of

preview(list(range(14)))   # '[0,1,2,3,4,5,6,7,8,9,10,1 ...]'
type_of({"a": 1})          # 'object'
```

Building a query tree by hand and rendering it:

```python
from jqtree.query import Query, Term, Index
from jqtree.term_type import TermType

q = Query(term=Term(type=TermType.INDEX, index=Index(name="foo")))
str(q)                     # '.foo'
q.to_indices([])           # ['foo']
```

Values follow the JSON data model: `None`, `bool`, `int`, `float`, `str`,
`list` and `dict` with string keys.

## What this package does not do

There is no parser for query text and no evaluator. Trees are built in code
from the node classes, and nothing runs a query against input. There is also
no command-line tool.

## Tests

```
pip install ".[test]"
pytest
```