import re
from typing import Iterator, NamedTuple

BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
LINE_COMMENT = "//"

CONTROL_HEADER = re.compile(r"^(?:else\s+)?(?:if|while|for|switch|catch)\s*\(")
ELSE_WITH_BODY = re.compile(r"^else\s+(?!if\b)([^{\s].*)$")
CASE_LABEL = re.compile(r"^(?:case|default)\b")
# A `{` after one of these opens an initializer list, not a block
INITIALIZER_PREFIX = re.compile(r"(?:=|,|\(|\breturn)\s*$")


class Statement(NamedTuple):
    text: str
    line: int


def _append_segment(lines, origins, segment, line_number):
    """Glue `segment` onto the last logical line, opening new lines at each newline."""
    parts = segment.split("\n")
    if not lines[-1].strip() and parts[0].strip():
        # Text resuming after a comment starts the logical line
        origins[-1] = line_number
    lines[-1] += parts[0]
    for part in parts[1:]:
        line_number += 1
        lines.append(part)
        origins.append(line_number)
    return line_number


def strip_block_comments(src_code):
    """
    Remove /* ... */ comments and return the remaining physical lines.

    Each entry is a (line_number, text) pair where line_number is the line of
    the original text the entry starts on. A multi-line comment is deleted
    outright, so the text before and after it ends up on one line, but the
    lines following it keep their original numbers.
    """
    lines = [""]
    origins = [1]
    line_number = 1
    position = 0
    for match in BLOCK_COMMENT.finditer(src_code):
        line_number = _append_segment(lines, origins, src_code[position:match.start()], line_number)
        line_number += match.group(0).count("\n")
        position = match.end()
    _append_segment(lines, origins, src_code[position:], line_number)
    return list(zip(origins, lines))


def strip_line_comment(line):
    # "//" inside a string literal is cut as well
    index = line.find(LINE_COMMENT)
    if index != -1:
        return line[:index]
    return line


def _next_char(text, index):
    return text[index:].lstrip()[:1]


def _flush(segments, current):
    text = "".join(current).strip()
    if text:
        segments.append(text)
    current.clear()


def _matching_paren(text, open_index):
    depth = 0
    quote = None
    index = open_index
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return None


def split_control_header(text):
    """
    Separate a brace-less body from its control header.

    `if (x) a();` gives `if (x)` and `a();`, `else b();` gives `else` and
    `b();`. Headers followed by `{` or `;` are left whole.
    """
    match = ELSE_WITH_BODY.match(text)
    if match:
        return ["else"] + split_control_header(match.group(1))
    if not CONTROL_HEADER.match(text):
        return [text]
    close_index = _matching_paren(text, text.index("("))
    if close_index is None:
        return [text]
    body = text[close_index + 1:].strip()
    if not body or body[0] in "{;":
        return [text]
    return [text[:close_index + 1]] + split_control_header(body)


def split_inline_statements(line):
    """
    Break one cleaned line into the statements written on it.

    A statement ends after a `;` or `{` outside parentheses and every `}` (with
    a directly following `;`) stands on its own, so
    `if (x) { a(); } else { b(); }` becomes `if (x) {`, `a();`, `}`,
    `else {`, `b();`, `}`. A case label ends at its colon. Initializer braces,
    empty `{}` pairs and string or character literals are never split.
    """
    segments = []
    current = []
    paren_depth = 0
    initializer_depth = 0
    quote = None
    index = 0
    while index < len(line):
        char = line[index]
        current.append(char)
        if quote:
            if char == "\\" and index + 1 < len(line):
                index += 1
                current.append(line[index])
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth = max(0, paren_depth - 1)
        elif paren_depth > 0:
            pass
        elif initializer_depth > 0:
            if char == "{":
                initializer_depth += 1
            elif char == "}":
                initializer_depth -= 1
        elif char == "{":
            if INITIALIZER_PREFIX.search("".join(current[:-1])):
                initializer_depth = 1
            elif _next_char(line, index + 1) == "}":
                close_index = line.index("}", index + 1)
                current.extend(line[index + 1:close_index + 1])
                index = close_index
                if _next_char(line, index + 1) != ";":
                    _flush(segments, current)
            else:
                _flush(segments, current)
        elif char == "}":
            current.pop()
            _flush(segments, current)
            current.append(char)
            if _next_char(line, index + 1) == ";":
                semicolon_index = line.index(";", index + 1)
                current.extend(line[index + 1:semicolon_index + 1])
                index = semicolon_index
            _flush(segments, current)
        elif char == ";":
            _flush(segments, current)
        elif char == ":":
            is_scope_operator = line[index + 1:index + 2] == ":" or line[index - 1:index] == ":"
            if (
                not is_scope_operator
                and CASE_LABEL.match("".join(current).strip())
                and _next_char(line, index + 1) != "{"
            ):
                _flush(segments, current)
        index += 1
    _flush(segments, current)

    statements = []
    for segment in segments:
        statements.extend(split_control_header(segment))
    return statements


class StatementParser:
    """Turns raw C/C++ text into an ordered stream of logical statements."""

    def __init__(self, src_code=""):
        self.src_code = src_code or ""

    def preprocess_code(self):
        """Return the comment-free statements, one per line."""
        return "\n".join(statement.text for statement in self.statements())

    def statements(self) -> Iterator[Statement]:
        """
        Lazily yield the statements of each non-empty cleaned line.

        Statements sharing a line share its line number. The generator is
        single-pass; call statements() again to restart from the original text.
        """
        for line_number, line in strip_block_comments(self.src_code):
            text = strip_line_comment(line).strip()
            for statement in split_inline_statements(text):
                yield Statement(statement, line_number)


def parse_statements(src_code):
    return StatementParser(src_code).statements()
