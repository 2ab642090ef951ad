import html
import re

MAX_LABEL_LENGTH = 50
ELLIPSIS = "..."

STRUCTURAL_CHARACTERS = re.compile(r"[\[\]{}]")
OWN_ENTITIES = re.compile(r"&(amp|lt|gt);")
ENTITY_CHARACTERS = {"amp": "&", "lt": "<", "gt": ">"}


def sanitize_label(text):
    """
    Make a statement safe to embed in a quoted Mermaid label.

    Double quotes become single quotes, square and curly brackets become
    spaces and &, <, > are written as HTML entities. Labels longer than
    MAX_LABEL_LENGTH visible characters are cut and end in "...".

    The entities this function writes (&amp;, &lt;, &gt;) are decoded first,
    so the length is counted on what the viewer shows and sanitizing twice
    changes nothing. Any other `&name` is plain C and gets escaped.
    """
    safe_text = OWN_ENTITIES.sub(lambda match: ENTITY_CHARACTERS[match.group(1)], str(text))
    safe_text = safe_text.replace('"', "'")
    safe_text = STRUCTURAL_CHARACTERS.sub(" ", safe_text)

    if len(safe_text) > MAX_LABEL_LENGTH:
        safe_text = safe_text[:MAX_LABEL_LENGTH - len(ELLIPSIS)] + ELLIPSIS

    return html.escape(safe_text, quote=False)


def extract_condition(text, keyword):
    """
    Pull the parenthesised expression that follows `keyword`.

    `if (a > b) {` gives `a > b`. The match runs to the last `)` on the line,
    and a trailing `)` without an opening partner is dropped. Without a
    parenthesised group the keyword and every parenthesis are stripped from
    the text instead, so some label always comes back.
    """
    match = re.search(re.escape(keyword) + r"\s*\((.*)\)", text)
    if match and match.group(1):
        condition = match.group(1)
        if condition.endswith(")") and condition.count(")") > condition.count("("):
            condition = condition[:-1]
        return condition.strip()
    return re.sub(r"[()]", "", text.replace(keyword, "", 1)).strip()
