import logging

import pytest


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Remove handlers installed by ``logging.basicConfig`` in the CLI.

    CliRunner swaps stdout/stderr for every invocation; a handler left on
    the root logger would keep writing to a closed stream afterwards.
    """
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in saved:
                root.removeHandler(handler)
