import pytest

from cppviz.utils.c_nodes import (
    StatementKind,
    case_value,
    classify_statement,
    closes_scope,
    is_declaration_scope,
    is_skipped,
    opens_scope,
)


@pytest.mark.parametrize(
    "text, kind",
    [
        ("if (x) {", StatementKind.IF),
        ("if(x)", StatementKind.IF),
        ("else if (y) {", StatementKind.IF),
        ("else {", StatementKind.ELSE),
        ("else", StatementKind.ELSE),
        ("switch (n) {", StatementKind.SWITCH),
        ("case 3:", StatementKind.CASE),
        ("default:", StatementKind.CASE),
        ("while (running) {", StatementKind.LOOP),
        ("for (;;) {", StatementKind.LOOP),
        ("do {", StatementKind.DO),
        ("try {", StatementKind.TRY),
        ("catch (...) {", StatementKind.CATCH),
        ("return 0;", StatementKind.JUMP),
        ("break;", StatementKind.JUMP),
        ("continue;", StatementKind.JUMP),
        ("goto done;", StatementKind.JUMP),
        ("throw std::runtime_error(msg);", StatementKind.JUMP),
        ("x = 1;", StatementKind.STATEMENT),
    ],
)
def test_classify_statement(text, kind):
    assert classify_statement(text) == kind


@pytest.mark.parametrize(
    "text",
    [
        "double ratio = 0.5;",
        "format(out, value);",
        "default_value = 3;",
        "iffy();",
        "elsewhere = 1;",
        "tryLock();",
        "returned = true;",
        "casein = 2;",
        "whileLoopCount++;",
    ],
)
def test_keywords_must_be_whole_words(text):
    assert classify_statement(text) == StatementKind.STATEMENT


def test_declaration_headers():
    assert is_declaration_scope("struct Point {")
    assert is_declaration_scope("class Foo : public Bar {")
    assert is_declaration_scope("namespace detail {")
    assert not is_declaration_scope("structure = build();")
    assert not is_declaration_scope("classify(x);")


def test_skipped_prefixes():
    assert is_skipped("#include <stdio.h>")
    assert is_skipped("#define MAX 10")
    assert is_skipped("using namespace std;")
    assert is_skipped("template <typename T>")
    assert not is_skipped("x = 1;")


def test_scope_detection():
    assert opens_scope("if (x) {")
    assert not opens_scope("int a[] = {1, 2};")
    assert closes_scope("}")
    assert closes_scope("} else {")
    assert closes_scope("x(); }")
    assert not closes_scope("{")


@pytest.mark.parametrize(
    "text, value",
    [
        ("case 1:", "1"),
        ("case 'a':", "'a'"),
        ("case Color::Red:", "Color::Red"),
        ("case 4: x();", "4"),
        ("default:", ""),
        ("x = 1;", ""),
    ],
)
def test_case_value(text, value):
    assert case_value(text) == value
