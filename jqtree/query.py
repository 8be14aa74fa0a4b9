"""Abstract syntax tree of jq queries, with formatting back to query text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jqtree.preview import encode_string
from jqtree.term_type import TermType

COMMA = ","
NEGATE = "-"


def to_number(text: str) -> int | float:
    """Convert a numeric literal of a query into an ``int`` or a ``float``.

    Literals with a fraction or an exponent become floats (overflowing to
    infinity); the others become integers. Invalid text raises ``ValueError``.
    """
    if any(c in text for c in ".eE"):
        return float(text)
    return int(text, 10)


def _last_char(out: list[str]) -> str:
    for part in reversed(out):
        if part:
            return part[-1]
    return ""


def _write(out: list[str], *parts: Any) -> None:
    """Write strings and nodes in order, skipping ``None``."""
    for part in parts:
        if isinstance(part, str):
            out.append(part)
        elif part is not None:
            part.write_to(out)


def _write_joined(out: list[str], nodes: list[Any], sep: str) -> None:
    for i, node in enumerate(nodes):
        if i:
            out.append(sep)
        node.write_to(out)


def _write_object(out: list[str], key_vals: list[Any]) -> None:
    if not key_vals:
        out.append("{}")
        return
    out.append("{ ")
    _write_joined(out, key_vals, ", ")
    out.append(" }")


def _write_key_val(out: list[str], key: str, key_string: Any, key_query: Any, val: Any) -> None:
    if key:
        out.append(key)
    elif key_string is not None:
        key_string.write_to(out)
    elif key_query is not None:
        _write(out, "(", key_query, ")")
    if val is not None:
        _write(out, ": ", val)


def _write_fold(out: list[str], keyword: str, query: Any, pattern: Any, parts: list[Any]) -> None:
    _write(out, keyword, " ", query, " as ", pattern, " (")
    _write_joined(out, [p for p in parts if p is not None], "; ")
    out.append(")")


def _minify(*nodes: Any) -> None:
    """Minify every node given, descending into lists and skipping ``None``."""
    for node in nodes:
        if isinstance(node, list):
            _minify(*node)
        elif node is not None:
            node.minify()


def _first(*nodes: Any) -> Any:
    return next((n for n in nodes if n is not None), None)


class _Node:
    """Base of syntax tree nodes; ``str()`` gives the query text."""

    def write_to(self, out: list[str]) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        out: list[str] = []
        self.write_to(out)
        return "".join(out)


@dataclass(eq=True)
class Query(_Node):
    """A query: a term, a binary operation, or a minified function name."""

    meta: ConstObject | None = None
    imports: list[Import] = field(default_factory=list)
    func_defs: list[FuncDef] = field(default_factory=list)
    term: Term | None = None
    left: Query | None = None
    op: str | None = None
    right: Query | None = None
    func: str = ""

    def write_to(self, out: list[str]) -> None:
        if self.meta is not None:
            _write(out, "module ", self.meta, ";\n")
        for im in self.imports:
            im.write_to(out)
        for fd in self.func_defs:
            _write(out, fd, " ")
        if self.func:
            out.append(self.func)
        elif self.term is not None:
            self.term.write_to(out)
        elif self.right is not None:
            sep = ", " if self.op == COMMA else f" {self.op} "
            _write(out, self.left, sep, self.right)

    def minify(self) -> None:
        """Replace simple terms by function names, recursively."""
        _minify(self.func_defs)
        if self.term is not None:
            name = self.term.to_func()
            if name:
                self.term = None
                self.func = name
            else:
                self.term.minify()
        elif self.right is not None:
            _minify(self.left, self.right)

    def to_index_key(self) -> Any:
        """Return the constant index key of the query, or ``None``."""
        if self.term is None:
            return None
        return self.term.to_index_key()

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Extend ``xs`` with the constant path of the query, or return ``None``."""
        if self.term is None:
            return None
        return self.term.to_indices(xs)


@dataclass(eq=True)
class Import(_Node):
    """An ``import`` or ``include`` directive."""

    import_path: str = ""
    import_alias: str = ""
    include_path: str = ""
    meta: ConstObject | None = None

    def write_to(self, out: list[str]) -> None:
        if self.import_path:
            _write(out, "import ", encode_string(self.import_path), " as ", self.import_alias)
        else:
            _write(out, "include ", encode_string(self.include_path))
        if self.meta is not None:
            _write(out, " ", self.meta)
        out.append(";\n")


@dataclass(eq=True)
class FuncDef(_Node):
    """A function definition."""

    name: str = ""
    args: list[str] = field(default_factory=list)
    body: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "def ", self.name)
        if self.args:
            _write(out, "(", "; ".join(self.args), ")")
        _write(out, ": ", self.body, ";")

    def minify(self) -> None:
        """Minify the body."""
        _minify(self.body)


@dataclass(eq=True)
class Term(_Node):
    """A term followed by its suffixes."""

    type: TermType = TermType.IDENTITY
    index: Index | None = None
    func: Func | None = None
    object: Object | None = None
    array: Array | None = None
    number: str = ""
    unary: Unary | None = None
    format: str = ""
    string: String | None = None
    if_: If | None = None
    try_: Try | None = None
    reduce: Reduce | None = None
    foreach: Foreach | None = None
    label: Label | None = None
    break_: str = ""
    query: Query | None = None
    suffix_list: list[Suffix] = field(default_factory=list)

    _KEYWORDS = {
        TermType.IDENTITY: ".",
        TermType.RECURSE: "..",
        TermType.NULL: "null",
        TermType.TRUE: "true",
        TermType.FALSE: "false",
    }

    def _child(self) -> Any:
        return {
            TermType.INDEX: self.index,
            TermType.FUNC: self.func,
            TermType.OBJECT: self.object,
            TermType.ARRAY: self.array,
            TermType.UNARY: self.unary,
            TermType.STRING: self.string,
            TermType.IF: self.if_,
            TermType.TRY: self.try_,
            TermType.REDUCE: self.reduce,
            TermType.FOREACH: self.foreach,
            TermType.LABEL: self.label,
        }.get(self.type)

    def write_to(self, out: list[str]) -> None:
        keyword = self._KEYWORDS.get(self.type)
        if keyword is not None:
            out.append(keyword)
        elif self.type is TermType.NUMBER:
            out.append(self.number)
        elif self.type is TermType.FORMAT:
            out.append(self.format)
            if self.string is not None:
                _write(out, " ", self.string)
        elif self.type is TermType.BREAK:
            _write(out, "break ", self.break_)
        elif self.type is TermType.QUERY:
            _write(out, "(", self.query, ")")
        else:
            _write(out, self._child())
        for suffix in self.suffix_list:
            suffix.write_to(out)

    def minify(self) -> None:
        """Minify nested queries."""
        if self.type is TermType.FORMAT:
            _minify(self.string)
        elif self.type is TermType.QUERY:
            _minify(self.query)
        else:
            _minify(self._child())
        _minify(self.suffix_list)

    def to_func(self) -> str:
        """Return the function name equivalent to this term, or ``""``."""
        if self.suffix_list:
            return ""
        keyword = self._KEYWORDS.get(self.type)
        if keyword is not None:
            return keyword
        if self.type is TermType.FUNC:
            return self.func.to_func()
        return ""

    def to_index_key(self) -> Any:
        """Return the constant index key of the term, or ``None``."""
        if self.type is TermType.NUMBER:
            return to_number(self.number)
        if self.type is TermType.UNARY:
            return self.unary.to_number()
        if self.type is TermType.STRING and self.string.queries is None:
            return self.string.text
        return None

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Extend ``xs`` with the constant path of the term, or return ``None``."""
        if self.type is TermType.INDEX:
            result = self.index.to_indices(xs)
        elif self.type is TermType.QUERY:
            result = self.query.to_indices(xs)
        else:
            return None
        for suffix in self.suffix_list:
            if result is None:
                return None
            result = suffix.to_indices(result)
        return result

    def to_number(self) -> int | float | None:
        """Return the number of a numeric literal term, or ``None``."""
        if self.type is TermType.NUMBER:
            return to_number(self.number)
        return None


@dataclass(eq=True)
class Unary(_Node):
    """A unary operator applied to a term."""

    op: str = NEGATE
    term: Term | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, self.op, self.term)

    def minify(self) -> None:
        """Minify the operand."""
        _minify(self.term)

    def to_number(self) -> int | float | None:
        """Return the signed constant number, or ``None``."""
        v = self.term.to_number()
        if v is not None and self.op == NEGATE:
            v = -v
        return v


@dataclass(eq=True)
class Pattern(_Node):
    """A destructuring pattern: a variable, an array or an object."""

    name: str = ""
    array: list[Pattern] = field(default_factory=list)
    object: list[PatternObject] = field(default_factory=list)

    def write_to(self, out: list[str]) -> None:
        if self.name:
            out.append(self.name)
            return
        for items, open_, close in ((self.array, "[", "]"), (self.object, "{", "}")):
            if items:
                out.append(open_)
                _write_joined(out, items, ", ")
                out.append(close)
                return


@dataclass(eq=True)
class PatternObject(_Node):
    """An entry of an object pattern."""

    key: str = ""
    key_string: String | None = None
    key_query: Query | None = None
    val: Pattern | None = None

    def write_to(self, out: list[str]) -> None:
        _write_key_val(out, self.key, self.key_string, self.key_query, self.val)


@dataclass(eq=True)
class Index(_Node):
    """An index or slice: ``.name``, ``."str"``, ``.[q]`` or ``.[a:b]``."""

    name: str = ""
    string: String | None = None
    start: Query | None = None
    end: Query | None = None
    is_slice: bool = False

    def write_to(self, out: list[str]) -> None:
        # ". .x" != "..x" and "0 .x" != "0.x"
        c = _last_char(out)
        if c == "." or "0" <= c <= "9" and c:
            out.append(" ")
        out.append(".")
        self.write_suffix_to(out)

    def write_suffix_to(self, out: list[str]) -> None:
        """Write the index without its leading dot."""
        if self.name:
            out.append(self.name)
        elif self.string is not None:
            self.string.write_to(out)
        elif self.is_slice:
            _write(out, "[", self.start, ":", self.end, "]")
        else:
            _write(out, "[", self.start, "]")

    def minify(self) -> None:
        """Minify nested queries."""
        _minify(self.string, self.start, self.end)

    def to_index_key(self) -> Any:
        """Return the constant key of the index, or ``None``."""
        if self.name:
            return self.name
        if self.string is not None:
            return self.string.text if self.string.queries is None else None
        if not self.is_slice:
            return self.start.to_index_key()
        bounds = {}
        for name, q in (("start", self.start), ("end", self.end)):
            bounds[name] = None
            if q is not None:
                bounds[name] = q.to_index_key()
                if bounds[name] is None:
                    return None
        return bounds

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Return ``xs`` extended with the constant key, or ``None``."""
        key = self.to_index_key()
        if key is None:
            return None
        return [*xs, key]


@dataclass(eq=True)
class Func(_Node):
    """A function call or variable reference."""

    name: str = ""
    args: list[Query] = field(default_factory=list)

    def write_to(self, out: list[str]) -> None:
        out.append(self.name)
        if self.args:
            out.append("(")
            _write_joined(out, self.args, "; ")
            out.append(")")

    def minify(self) -> None:
        """Minify the arguments."""
        _minify(self.args)

    def to_func(self) -> str:
        """Return the name of a call without arguments, or ``""``."""
        return "" if self.args else self.name


@dataclass(eq=True)
class String(_Node):
    """A string literal, possibly with interpolated queries."""

    text: str = ""
    queries: list[Query] | None = None

    def write_to(self, out: list[str]) -> None:
        if self.queries is None:
            out.append(encode_string(self.text))
            return
        out.append('"')
        for q in self.queries:
            if q.term.string is None:
                _write(out, "\\", q)
            else:
                out.append(str(q)[1:-1])
        out.append('"')

    def minify(self) -> None:
        """Minify the interpolated queries."""
        _minify(self.queries)


@dataclass(eq=True)
class Object(_Node):
    """An object construction."""

    key_vals: list[ObjectKeyVal] = field(default_factory=list)

    def write_to(self, out: list[str]) -> None:
        _write_object(out, self.key_vals)

    def minify(self) -> None:
        """Minify the entries."""
        _minify(self.key_vals)


@dataclass(eq=True)
class ObjectKeyVal(_Node):
    """An entry of an object construction."""

    key: str = ""
    key_string: String | None = None
    key_query: Query | None = None
    val: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write_key_val(out, self.key, self.key_string, self.key_query, self.val)

    def minify(self) -> None:
        """Minify the key and the value."""
        _minify(_first(self.key_string, self.key_query), self.val)


@dataclass(eq=True)
class Array(_Node):
    """An array construction."""

    query: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "[", self.query, "]")

    def minify(self) -> None:
        """Minify the element query."""
        _minify(self.query)


@dataclass(eq=True)
class Suffix(_Node):
    """A term suffix: an index, ``[]``, ``?`` or a binding."""

    index: Index | None = None
    iter: bool = False
    optional: bool = False
    bind: Bind | None = None

    def write_to(self, out: list[str]) -> None:
        if self.index is not None:
            if self.index.name or self.index.string is not None:
                self.index.write_to(out)
            else:
                self.index.write_suffix_to(out)
        elif self.iter:
            out.append("[]")
        elif self.optional:
            out.append("?")
        else:
            _write(out, self.bind)

    def minify(self) -> None:
        """Minify the index or the binding."""
        _minify(_first(self.index, self.bind))

    def to_term(self) -> Term | None:
        """Return a standalone term for an index or iteration suffix."""
        if self.index is not None:
            return Term(type=TermType.INDEX, index=self.index)
        if self.iter:
            return Term(type=TermType.IDENTITY, suffix_list=[Suffix(iter=True)])
        return None

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Return ``xs`` extended with the constant key, or ``None``."""
        if self.index is None:
            return None
        return self.index.to_indices(xs)


@dataclass(eq=True)
class Bind(_Node):
    """A variable binding with alternative patterns."""

    patterns: list[Pattern] = field(default_factory=list)
    body: Query | None = None

    def write_to(self, out: list[str]) -> None:
        for i, p in enumerate(self.patterns):
            _write(out, "?// " if i else " as ", p, " ")
        _write(out, "| ", self.body)

    def minify(self) -> None:
        """Minify the body."""
        _minify(self.body)


@dataclass(eq=True)
class If(_Node):
    """A conditional expression."""

    cond: Query | None = None
    then: Query | None = None
    elif_: list[IfElif] = field(default_factory=list)
    else_: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "if ", self.cond, " then ", self.then)
        for branch in self.elif_:
            _write(out, " ", branch)
        if self.else_ is not None:
            _write(out, " else ", self.else_)
        out.append(" end")

    def minify(self) -> None:
        """Minify every branch."""
        _minify(self.cond, self.then, self.elif_, self.else_)


@dataclass(eq=True)
class IfElif(_Node):
    """An ``elif`` branch."""

    cond: Query | None = None
    then: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "elif ", self.cond, " then ", self.then)

    def minify(self) -> None:
        """Minify the condition and the branch."""
        _minify(self.cond, self.then)


@dataclass(eq=True)
class Try(_Node):
    """A ``try`` expression with an optional ``catch``."""

    body: Query | None = None
    catch: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "try ", self.body)
        if self.catch is not None:
            _write(out, " catch ", self.catch)

    def minify(self) -> None:
        """Minify the body and the handler."""
        _minify(self.body, self.catch)


@dataclass(eq=True)
class Reduce(_Node):
    """A ``reduce`` expression."""

    query: Query | None = None
    pattern: Pattern | None = None
    start: Query | None = None
    update: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write_fold(out, "reduce", self.query, self.pattern, [self.start, self.update])

    def minify(self) -> None:
        """Minify the nested queries."""
        _minify(self.query, self.start, self.update)


@dataclass(eq=True)
class Foreach(_Node):
    """A ``foreach`` expression."""

    query: Query | None = None
    pattern: Pattern | None = None
    start: Query | None = None
    update: Query | None = None
    extract: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write_fold(
            out, "foreach", self.query, self.pattern, [self.start, self.update, self.extract]
        )

    def minify(self) -> None:
        """Minify the nested queries."""
        _minify(self.query, self.start, self.update, self.extract)


@dataclass(eq=True)
class Label(_Node):
    """A ``label`` expression."""

    ident: str = ""
    body: Query | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, "label ", self.ident, " | ", self.body)

    def minify(self) -> None:
        """Minify the body."""
        _minify(self.body)


@dataclass(eq=True)
class ConstTerm(_Node):
    """A constant term in module metadata."""

    object: ConstObject | None = None
    array: ConstArray | None = None
    number: str = ""
    text: str = ""
    null: bool = False
    true: bool = False
    false: bool = False

    def _flag(self) -> str | None:
        for name in ("null", "true", "false"):
            if getattr(self, name):
                return name
        return None

    def write_to(self, out: list[str]) -> None:
        if self.object is not None or self.array is not None:
            _write(out, _first(self.object, self.array))
        elif self.number:
            out.append(self.number)
        else:
            flag = self._flag()
            out.append(flag if flag is not None else encode_string(self.text))

    def to_value(self) -> Any:
        """Return the constant as a plain value."""
        if self.object is not None or self.array is not None:
            return _first(self.object, self.array).to_value()
        if self.number:
            return to_number(self.number)
        flag = self._flag()
        if flag is not None:
            return {"null": None, "true": True, "false": False}[flag]
        return self.text

    def to_string(self) -> str | None:
        """Return the text of a string constant, or ``None`` for other constants."""
        if (self.object is not None or self.array is not None or self.number
                or self._flag() is not None):
            return None
        return self.text


@dataclass(eq=True)
class ConstObject(_Node):
    """A constant object."""

    key_vals: list[ConstObjectKeyVal] = field(default_factory=list)

    def write_to(self, out: list[str]) -> None:
        _write_object(out, self.key_vals)

    def to_value(self) -> dict[str, Any]:
        """Return the object as a dictionary."""
        return {kv.key or kv.key_string: kv.val.to_value() for kv in self.key_vals}


@dataclass(eq=True)
class ConstObjectKeyVal(_Node):
    """An entry of a constant object."""

    key: str = ""
    key_string: str = ""
    val: ConstTerm | None = None

    def write_to(self, out: list[str]) -> None:
        _write(out, self.key or encode_string(self.key_string), ": ", self.val)


@dataclass(eq=True)
class ConstArray(_Node):
    """A constant array."""

    elems: list[ConstTerm] = field(default_factory=list)

    def write_to(self, out: list[str]) -> None:
        out.append("[")
        _write_joined(out, self.elems, ", ")
        out.append("]")

    def to_value(self) -> list[Any]:
        """Return the array as a list."""
        return [e.to_value() for e in self.elems]