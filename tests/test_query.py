import math

import pytest

from jqtree.query import (
    Array,
    Bind,
    ConstArray,
    ConstObject,
    ConstObjectKeyVal,
    ConstTerm,
    Foreach,
    Func,
    FuncDef,
    If,
    IfElif,
    Import,
    Index,
    Label,
    Object,
    ObjectKeyVal,
    Pattern,
    Query,
    Reduce,
    String,
    Suffix,
    Term,
    Try,
    Unary,
    to_number,
)
from jqtree.term_type import TermType


def ident():
    return Query(term=Term(type=TermType.IDENTITY))


def num(text):
    return Query(term=Term(type=TermType.NUMBER, number=text))


def call(name, *args):
    return Query(term=Term(type=TermType.FUNC, func=Func(name=name, args=list(args))))


def test_to_number_int_and_float():
    assert to_number("42") == 42
    assert isinstance(to_number("42"), int)
    assert to_number("2.5") == 2.5
    assert to_number("1e3") == 1000.0


def test_to_number_overflow_is_infinite():
    assert to_number("1e1000") == math.inf


def test_to_number_invalid():
    with pytest.raises(ValueError):
        to_number("abc")


@pytest.mark.parametrize(
    "ttype, text",
    [
        (TermType.IDENTITY, "."),
        (TermType.RECURSE, ".."),
        (TermType.NULL, "null"),
        (TermType.TRUE, "true"),
        (TermType.FALSE, "false"),
    ],
)
def test_keyword_terms(ttype, text):
    term = Term(type=ttype)
    assert str(term) == text
    assert term.to_func() == text


def test_index_after_dot_and_digit_gets_space():
    t1 = Term(type=TermType.IDENTITY, suffix_list=[Suffix(index=Index(name="x"))])
    assert str(t1) == ". .x"
    t2 = Term(type=TermType.NUMBER, number="0", suffix_list=[Suffix(index=Index(name="x"))])
    assert str(t2) == "0 .x"


def test_bracket_index_suffix_has_no_dot():
    term = Term(
        type=TermType.INDEX,
        index=Index(name="a"),
        suffix_list=[Suffix(index=Index(start=num("0")))],
    )
    text = str(term)
    assert text.startswith(".a")
    assert text.endswith("[0]")
    assert ".[" not in text


def test_slice_format():
    index = Index(start=num("1"), is_slice=True)
    text = str(index)
    assert text.startswith(".[")
    assert text.endswith(":]")


def test_comma_and_other_operators():
    q = Query(left=ident(), op=",", right=ident())
    assert str(q).split(", ") == [".", "."]
    p = Query(left=num("1"), op="|", right=num("2"))
    assert str(p).split(" | ") == ["1", "2"]


def test_funcdef_and_call_format():
    fd = FuncDef(name="f", args=["a", "$b"], body=ident())
    text = str(fd)
    assert text.startswith("def f(")
    assert "a; $b" in text
    assert text.endswith(": .;")
    q = Query(func_defs=[fd], term=Term(type=TermType.FUNC, func=Func(name="f", args=[num("1"), num("2")])))
    assert str(q).startswith(text + " f(")


def test_import_and_include():
    im = Import(import_path="mod", import_alias="m")
    assert str(im).startswith("import ")
    assert str(im).endswith(" as m;\n")
    inc = Import(include_path="lib")
    assert str(inc).startswith("include ")
    assert '"lib"' in str(inc)


def test_module_meta():
    meta = ConstObject(key_vals=[ConstObjectKeyVal(key="a", val=ConstTerm(null=True))])
    q = Query(meta=meta, term=Term(type=TermType.IDENTITY))
    assert str(q).startswith("module " + str(meta) + ";\n")


def test_control_structures_format():
    cond = If(cond=ident(), then=num("1"), elif_=[IfElif(cond=ident(), then=num("2"))], else_=num("3"))
    text = str(cond)
    assert text.startswith("if ")
    assert " elif " in text
    assert " else " in text
    assert text.endswith(" end")
    tr = Try(body=ident(), catch=num("0"))
    assert " catch " in str(tr)
    assert str(Try(body=ident())).startswith("try ")
    red = Reduce(query=ident(), pattern=Pattern(name="$x"), start=num("0"), update=ident())
    assert str(red).startswith("reduce ")
    assert " as $x (" in str(red)
    fe = Foreach(query=ident(), pattern=Pattern(name="$x"), start=num("0"), update=ident(), extract=ident())
    assert str(fe).startswith("foreach ")
    assert str(fe).count("; ") == 2
    lb = Label(ident="$out", body=ident())
    assert str(lb).startswith("label $out | ")


def test_object_and_array_format():
    assert str(Object()) == "{}"
    obj = Object(key_vals=[ObjectKeyVal(key="a", val=num("1"))])
    assert str(obj).startswith("{ ")
    assert str(obj).endswith(" }")
    assert str(Array()) == "[]" or str(Array()).startswith("[")
    assert str(Array(query=num("1"))).strip("[]") == "1"


def test_bind_format():
    bind = Bind(patterns=[Pattern(name="$a"), Pattern(name="$b")], body=ident())
    text = str(bind)
    assert text.startswith(" as $a ?// $b ")
    assert text.endswith("| .")


def test_string_interpolation():
    plain = String(text="a")
    assert str(plain) == '"a"'
    s = String(
        queries=[
            Query(term=Term(type=TermType.STRING, string=String(text="a"))),
            Query(term=Term(type=TermType.QUERY, query=ident())),
        ]
    )
    assert str(s) == '"a\\(.)"'


def test_minify_replaces_simple_terms():
    q = Query(left=ident(), op="|", right=call("empty"))
    before = str(q)
    q.minify()
    assert q.left.term is None
    assert q.left.func == "."
    assert q.right.func == "empty"
    assert str(q) == before


def test_minify_keeps_calls_with_args_and_suffixes():
    q = call("f", call("g"))
    q.minify()
    assert q.term is not None and q.func == ""
    assert q.term.func.args[0].func == "g"
    s = Query(term=Term(type=TermType.IDENTITY, suffix_list=[Suffix(iter=True)]))
    s.minify()
    assert s.func == ""


def test_index_keys():
    assert Index(name="foo").to_index_key() == "foo"
    assert Index(string=String(text="bar")).to_index_key() == "bar"
    assert Index(start=num("3")).to_index_key() == 3
    assert Index(start=num("1"), is_slice=True).to_index_key() == {"start": 1, "end": None}
    assert Index(start=ident(), is_slice=True).to_index_key() is None
    assert Index(string=String(queries=[])).to_index_key() is None


def test_unary_to_number():
    neg = Unary(op="-", term=Term(type=TermType.NUMBER, number="3"))
    assert neg.to_number() == -to_number("3")
    pos = Unary(op="+", term=Term(type=TermType.NUMBER, number="3"))
    assert pos.to_number() == 3
    assert Unary(op="-", term=Term(type=TermType.IDENTITY)).to_number() is None
    term = Term(type=TermType.UNARY, unary=neg)
    assert term.to_index_key() == neg.to_number()


def test_to_indices_path():
    q = Query(
        term=Term(
            type=TermType.INDEX,
            index=Index(name="a"),
            suffix_list=[Suffix(index=Index(start=num("0"))), Suffix(index=Index(name="b"))],
        )
    )
    assert q.to_indices([]) == ["a", 0, "b"]
    assert ident().to_indices([]) is None
    it = Query(term=Term(type=TermType.INDEX, index=Index(name="a"), suffix_list=[Suffix(iter=True)]))
    assert it.to_indices([]) is None


def test_to_indices_does_not_mutate_input():
    xs = ["x"]
    result = Index(name="y").to_indices(xs)
    assert result == ["x", "y"]
    assert xs == ["x"]


def test_suffix_to_term():
    idx = Index(name="k")
    term = Suffix(index=idx).to_term()
    assert term.type is TermType.INDEX and term.index is idx
    it = Suffix(iter=True).to_term()
    assert it.type is TermType.IDENTITY
    assert it.suffix_list == [Suffix(iter=True)]
    assert Suffix(optional=True).to_term() is None


def test_const_values():
    obj = ConstObject(
        key_vals=[
            ConstObjectKeyVal(key="a", val=ConstTerm(number="1")),
            ConstObjectKeyVal(
                key_string="b c",
                val=ConstTerm(array=ConstArray(elems=[ConstTerm(null=True), ConstTerm(text="x")])),
            ),
            ConstObjectKeyVal(key="t", val=ConstTerm(true=True)),
            ConstObjectKeyVal(key="f", val=ConstTerm(false=True)),
        ]
    )
    assert obj.to_value() == {"a": 1, "b c": [None, "x"], "t": True, "f": False}
    assert ConstTerm(object=obj).to_value() == obj.to_value()
    text = str(obj)
    assert '"b c": [null, "x"]' in text


def test_const_to_string():
    assert ConstTerm(text="x").to_string() == "x"
    assert ConstTerm(text="").to_string() == ""
    assert ConstTerm(true=True).to_string() is None
    assert ConstTerm(number="1").to_string() is None


def test_format_term():
    assert str(Term(type=TermType.FORMAT, format="@base64")) == "@base64"
    t = Term(type=TermType.FORMAT, format="@csv", string=String(text="x"))
    assert str(t).startswith("@csv ")


def test_break_term():
    assert str(Term(type=TermType.BREAK, break_="$out")) == "break $out"