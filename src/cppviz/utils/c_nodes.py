import re
from enum import Enum

statement_types = {
    "declaration_scope": ["struct", "class", "enum", "union", "namespace"],
    "skipped_prefix": ["#", "using namespace", "template"],
    "switch_statement": ["switch"],
    "case_statement": ["case", "default"],
    "loop_statement": ["while", "for"],
    "jump_statement": ["return", "break", "continue", "goto", "throw"],
}

node_categories = [
    "default",
    "decision",
    "process",
    "terminator",
    "switchHeader",
    "exceptionBlock",
]


class StatementKind(Enum):
    IF = "if"
    ELSE = "else"
    SWITCH = "switch"
    CASE = "case"
    LOOP = "loop"
    DO = "do"
    TRY = "try"
    CATCH = "catch"
    JUMP = "jump"
    STATEMENT = "statement"


def _keyword_pattern(keywords):
    return re.compile(r"^(?:" + "|".join(re.escape(k) for k in keywords) + r")\b")


DECLARATION_PATTERN = re.compile(
    r"^(?:" + "|".join(statement_types["declaration_scope"]) + r")\s+"
)

# Checked in order, the first pattern that matches decides the kind
CLASSIFICATION_ORDER = [
    (StatementKind.IF, re.compile(r"^(?:else\s+)?if\b")),
    (StatementKind.ELSE, _keyword_pattern(["else"])),
    (StatementKind.SWITCH, _keyword_pattern(statement_types["switch_statement"])),
    (StatementKind.CASE, _keyword_pattern(statement_types["case_statement"])),
    (StatementKind.LOOP, _keyword_pattern(statement_types["loop_statement"])),
    (StatementKind.DO, _keyword_pattern(["do"])),
    (StatementKind.TRY, _keyword_pattern(["try"])),
    (StatementKind.CATCH, _keyword_pattern(["catch"])),
    (StatementKind.JUMP, _keyword_pattern(statement_types["jump_statement"])),
]


def is_declaration_scope(text):
    """struct/class/enum/union/namespace headers, whose bodies never execute."""
    return DECLARATION_PATTERN.match(text) is not None


def is_skipped(text):
    """Preprocessor directives, using-directives and template headers."""
    return any(text.startswith(prefix) for prefix in statement_types["skipped_prefix"])


def brace_balance(text):
    return text.count("{") - text.count("}")


def opens_scope(text):
    return brace_balance(text) > 0


def is_empty_block(text):
    """A header whose block opens and closes on its own line (`while (x) {}`)."""
    return "{" in text and brace_balance(text) == 0


def closes_scope(text):
    """A leading `}` closes a scope even when the line opens another (`} else {`)."""
    return text.startswith("}") or brace_balance(text) < 0


def classify_statement(text):
    """Return the StatementKind of a cleaned statement; unknown shapes are STATEMENT."""
    for kind, pattern in CLASSIFICATION_ORDER:
        if pattern.match(text):
            return kind
    return StatementKind.STATEMENT


def loop_keyword(text):
    return "while" if text.startswith("while") else "for"


def case_value(text):
    """
    The value of a case label: `case 1:` gives `1`, `case Color::Red:` gives
    `Color::Red`. A bare `default` label has no value and gives an empty string.
    """
    if not text.startswith("case"):
        return ""
    body = text[len("case"):]
    match = re.search(r"(?<!:):(?!:)", body)
    if match:
        body = body[:match.start()]
    return body.strip()
