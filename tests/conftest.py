import logging
from logging import NullHandler

import pytest

from pureansi.emulation.grid_buffer import GridBuffer
from pureansi.protocol.ansi_parser import AnsiParser
from pureansi.terminal import Terminal
from pureansi.warnings import CollectingDiagnosticSink, get_warning_filters


@pytest.fixture
def diagnostics():
    """Fixture providing a sink that records every diagnostic."""
    return CollectingDiagnosticSink()


@pytest.fixture
def parser(diagnostics):
    """Fixture providing a real AnsiParser wired to the collecting sink."""
    return AnsiParser(diagnostics=diagnostics)


@pytest.fixture
def grid(diagnostics):
    """Fixture providing a 10-column GridBuffer."""
    return GridBuffer(10, diagnostics=diagnostics)


@pytest.fixture
def terminal(diagnostics):
    """Fixture providing a 10-column Terminal."""
    return Terminal(10, diagnostics=diagnostics)


@pytest.fixture(autouse=True)
def reset_warning_filters():
    """Keep the global warning filters from leaking between tests."""
    get_warning_filters().reset()
    yield
    get_warning_filters().reset()


@pytest.fixture
def preserve_root_logger():
    """Restore root logger level and handlers after code that reconfigures them."""
    root = logging.getLogger()
    old_level = root.level
    old_handlers = root.handlers[:]
    yield root
    for h in root.handlers[:]:
        if h not in old_handlers:
            root.removeHandler(h)
    for h in old_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(old_level)


@pytest.fixture(autouse=True)
def suppress_logging():
    logger = logging.getLogger()
    old_handlers = logger.handlers[:]
    null_handler = NullHandler()
    logger.addHandler(null_handler)
    yield
    # Remove only the NullHandler we added
    try:
        logger.removeHandler(null_handler)
    except ValueError:
        pass
    # Restore any handlers that were removed during the test
    current_handlers = logger.handlers[:]
    for h in old_handlers:
        if h not in current_handlers:
            logger.addHandler(h)
    for h in logger.handlers[:]:
        if h not in old_handlers:
            logger.removeHandler(h)
