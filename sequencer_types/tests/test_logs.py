"""setup_logging: first call configures, later calls keep the chosen level."""
from __future__ import annotations

import logging

import pytest

from reference_vectors.harness import reference_test
from reference_vectors.vectors import REFERENCE_VECTORS
from sequencer_types.logs import PACKAGE_LOGGERS, setup_logging


@pytest.fixture
def fresh_package_loggers():
    saved = {name: logging.getLogger(name).level for name in PACKAGE_LOGGERS}
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.usefixtures("fresh_package_loggers")
class TestSetupLogging:
    def test_sets_package_levels(self):
        setup_logging(logging.DEBUG)
        for name in PACKAGE_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG

    def test_second_call_keeps_first_level(self):
        setup_logging(logging.WARNING)
        setup_logging()
        for name in PACKAGE_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_harness_keeps_caller_level(self):
        setup_logging(logging.WARNING)
        vector = REFERENCE_VECTORS["ns_table"]
        reference_test(vector.name, vector.build(), vector.load_fixture(), vector.commitment)
        assert logging.getLogger("reference_vectors").level == logging.WARNING
        assert logging.getLogger("sequencer_types").level == logging.WARNING

    def test_existing_root_handlers_kept(self):
        root = logging.getLogger()
        before = list(root.handlers)
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            setup_logging()
            assert root.handlers == before + [handler]
        finally:
            root.removeHandler(handler)
