from typing import NamedTuple, Optional

import networkx as nx
from loguru import logger

from ...tree_parser.statement_parser import StatementParser
from ...utils import c_nodes
from ...utils.c_nodes import StatementKind
from ...utils.label_utils import extract_condition

ROOT_ID = "Start"


class FlowNode(NamedTuple):
    id: str
    label: str
    category: str
    kind: StatementKind
    line: int = 0


class FlowEdge(NamedTuple):
    src: str
    dest: str
    style: str = "solid"
    tag: Optional[str] = None


class FlowchartGraph:
    """
    Line-oriented flowchart synthesizer for C/C++.

    Statements are consumed one at a time. The scope stack holds the node new
    statements attach to at each open nesting level, with the synthetic Start
    node at the bottom. Plain statements and case labels replace the top of the
    stack so siblings form a chain; control headers push a new level that is
    left again on the matching closing brace.

    Nothing here raises on odd input: unknown shapes become plain statements
    and unbalanced braces are ignored once the stack is back at the root.

    C and C++ share one rule set. src_language only tags the resulting graph
    (`graph.graph["src_language"]`) for the JSON and DOT writers.
    """

    def __init__(self, src_language="cpp", src_code="", properties=None):
        self.src_language = src_language
        self.src_code = src_code
        self.properties = properties or {}

        self.node_list = []
        self.edge_list = []
        # scope_kinds[i] is the kind of statement that opened scope_stack[i]
        self.scope_stack = [ROOT_ID]
        self.scope_kinds = [None]
        # (switch header id, scope depth the header was pushed at)
        self.switch_stack = []
        self.ignore_depth = 0
        self.node_counter = 0
        self.records = {
            "node_lines": {},
            "switch_cases": {},
        }

        self.node_list, self.edge_list = self.flowchart_cpp()
        self.graph = self.to_networkx(self.node_list, self.edge_list)

    @property
    def parent(self):
        return self.scope_stack[-1]

    def new_node(self, label, category, kind, line):
        node_id = f"Node{self.node_counter}"
        self.node_counter += 1
        self.node_list.append(FlowNode(node_id, label, category, kind, line))
        self.records["node_lines"][node_id] = line
        return node_id

    def add_edge(self, src, dest, style="solid", tag=None):
        """Add an edge to the edge list with validation"""
        if src is None or dest is None:
            logger.error(f"Attempting to add edge with None: {src} -> {dest}")
            return
        self.edge_list.append(FlowEdge(src, dest, style, tag))

    def push_scope(self, node_id, kind):
        self.scope_stack.append(node_id)
        self.scope_kinds.append(kind)

    def pop_scope(self):
        """Leave the innermost scope; the root is never popped."""
        if len(self.scope_stack) <= 1:
            return None
        closing_depth = len(self.scope_stack)
        if self.switch_stack and self.switch_stack[-1][1] == closing_depth:
            self.switch_stack.pop()
        self.scope_kinds.pop()
        return self.scope_stack.pop()

    def replace_scope_top(self, node_id):
        self.scope_stack[-1] = node_id

    def open_scope(self, node_id, kind, text):
        """Push a control header, or chain it when its block is already closed (`catch (...) {}`)."""
        if c_nodes.is_empty_block(text):
            self.replace_scope_top(node_id)
        else:
            self.push_scope(node_id, kind)

    def attach(self, node_id, kind, text):
        """Chain a sibling statement, or nest it when its line opens a block."""
        if c_nodes.opens_scope(text):
            self.push_scope(node_id, kind)
        else:
            self.replace_scope_top(node_id)

    def current_switch(self):
        if self.switch_stack:
            return self.switch_stack[-1][0]
        return None

    def handle_braces(self, text):
        """
        Apply the brace bookkeeping for one statement.

        Returns the text left to classify, or None when the statement produces
        no node (declaration bodies, bare braces, preprocessor lines).
        """
        if c_nodes.is_declaration_scope(text):
            if c_nodes.opens_scope(text):
                self.ignore_depth += 1
            return None
        if c_nodes.is_skipped(text):
            return None

        if self.ignore_depth > 0:
            self.ignore_depth = max(0, self.ignore_depth + c_nodes.brace_balance(text))
            return None

        if text == "{":
            return None

        if c_nodes.closes_scope(text):
            self.pop_scope()
            text = text.lstrip("};").strip()
            if not text:
                return None

        return text

    def add_if(self, text, line):
        condition = extract_condition(text, "if")
        current_id = self.new_node(f"{condition} ?", "decision", StatementKind.IF, line)
        self.add_edge(self.parent, current_id)
        self.open_scope(current_id, StatementKind.IF, text)

    def add_else(self, text, line):
        # A brace-less if body is still open; an if closed by `}` is gone already
        if self.scope_kinds[-1] == StatementKind.IF:
            self.pop_scope()
        current_id = self.new_node("else", "default", StatementKind.ELSE, line)
        self.add_edge(self.parent, current_id)
        self.open_scope(current_id, StatementKind.ELSE, text)

    def add_switch(self, text, line):
        condition = extract_condition(text, "switch")
        current_id = self.new_node(f"Switch: {condition}", "switchHeader", StatementKind.SWITCH, line)
        self.add_edge(self.parent, current_id)
        self.records["switch_cases"][current_id] = []
        if c_nodes.is_empty_block(text):
            self.replace_scope_top(current_id)
            return
        self.push_scope(current_id, StatementKind.SWITCH)
        self.switch_stack.append((current_id, len(self.scope_stack)))

    def add_case(self, text, line):
        if text.startswith("default"):
            case_label = "Default"
        else:
            case_label = f"Case {c_nodes.case_value(text)}".strip()
        switch_id = self.current_switch()
        source_id = switch_id if switch_id is not None else self.parent
        current_id = self.new_node(case_label, "decision", StatementKind.CASE, line)
        self.add_edge(source_id, current_id, tag=case_label)
        if switch_id is not None:
            self.records["switch_cases"][switch_id].append(current_id)
        self.attach(current_id, StatementKind.CASE, text)

    def add_loop(self, text, line):
        loop_type = c_nodes.loop_keyword(text)
        condition = extract_condition(text, loop_type)
        current_id = self.new_node(f"{loop_type}: {condition}", "decision", StatementKind.LOOP, line)
        self.add_edge(self.parent, current_id)
        if text.endswith(";"):
            # `} while (x);` or a loop with its whole body on the header line
            self.replace_scope_top(current_id)
        else:
            self.open_scope(current_id, StatementKind.LOOP, text)

    def add_do(self, text, line):
        current_id = self.new_node("DO loop start", "decision", StatementKind.DO, line)
        self.add_edge(self.parent, current_id)
        self.open_scope(current_id, StatementKind.DO, text)

    def add_try(self, text, line):
        current_id = self.new_node("TRY Block", "exceptionBlock", StatementKind.TRY, line)
        self.add_edge(self.parent, current_id)
        self.open_scope(current_id, StatementKind.TRY, text)

    def add_catch(self, text, line):
        if self.scope_kinds[-1] == StatementKind.TRY:
            self.pop_scope()
        condition = extract_condition(text, "catch")
        current_id = self.new_node(f"CATCH: {condition}", "exceptionBlock", StatementKind.CATCH, line)
        self.add_edge(self.parent, current_id, style="dashed")
        self.open_scope(current_id, StatementKind.CATCH, text)

    def add_jump(self, text, line):
        # Control leaves the scope here, but the stack is left as it is
        current_id = self.new_node(text, "terminator", StatementKind.JUMP, line)
        self.add_edge(self.parent, current_id)

    def add_statement(self, text, line):
        category = "process" if "(" in text else "default"
        current_id = self.new_node(text, category, StatementKind.STATEMENT, line)
        self.add_edge(self.parent, current_id)
        self.attach(current_id, StatementKind.STATEMENT, text)

    def flowchart_cpp(self):
        handlers = {
            StatementKind.IF: self.add_if,
            StatementKind.ELSE: self.add_else,
            StatementKind.SWITCH: self.add_switch,
            StatementKind.CASE: self.add_case,
            StatementKind.LOOP: self.add_loop,
            StatementKind.DO: self.add_do,
            StatementKind.TRY: self.add_try,
            StatementKind.CATCH: self.add_catch,
            StatementKind.JUMP: self.add_jump,
            StatementKind.STATEMENT: self.add_statement,
        }

        for statement in StatementParser(self.src_code).statements():
            text = self.handle_braces(statement.text)
            if text is None:
                continue
            kind = c_nodes.classify_statement(text)
            handlers[kind](text, statement.line)

        if len(self.scope_stack) > 1 or self.ignore_depth > 0:
            logger.debug(
                "Input ended with {} open scope(s) and ignore depth {}",
                len(self.scope_stack) - 1,
                self.ignore_depth,
            )

        return self.node_list, self.edge_list

    def to_networkx(self, node_list, edge_list):
        G = nx.MultiDiGraph(src_language=self.src_language)
        G.add_node(ROOT_ID, label="START", type_label="root", line=0)
        for node in node_list:
            G.add_node(node.id, label=node.label, type_label=node.category, line=node.line)
        for edge in edge_list:
            G.add_edge(
                edge.src,
                edge.dest,
                controlflow_type="exception" if edge.style == "dashed" else "next",
                edge_type="flowchart_edge",
                style=edge.style,
                label=edge.tag or "",
            )
        return G
