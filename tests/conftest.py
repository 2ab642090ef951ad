"""Pytest configuration and fixtures."""
import pytest
from loguru import logger

from cppviz.codeviews.flowchart.flowchart_cpp import FlowchartGraph


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI swaps loguru sinks; drop whatever a test left behind."""
    yield
    logger.remove()


@pytest.fixture
def build():
    """Build a flowchart from C/C++ text."""
    def _build(code):
        return FlowchartGraph("cpp", code)
    return _build


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def source_tree(tmp_path):
    """
    A small C project:

        main.c          includes "util.h" and <stdio.h>
        lib/util.c      includes "util.h"
        lib/util.h
        lib/myutil.h    never included
        other/lonely.c  no includes
        build/gen.h     inside an ignored folder
    """
    (tmp_path / "lib").mkdir()
    (tmp_path / "other").mkdir()
    (tmp_path / "build").mkdir()
    (tmp_path / "main.c").write_text('#include <stdio.h>\n#include "util.h"\nint main() { return helper(); }\n')
    (tmp_path / "lib" / "util.c").write_text('#include "util.h"\nint helper() { return 1; }\n')
    (tmp_path / "lib" / "util.h").write_text("int helper();\n")
    (tmp_path / "lib" / "myutil.h").write_text("int other();\n")
    (tmp_path / "other" / "lonely.c").write_text("void lonely() {}\n")
    (tmp_path / "build" / "gen.h").write_text('#include "util.h"\n')
    return tmp_path
