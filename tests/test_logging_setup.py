import logging

import task_service.main
from task_service.logging_setup import setup_logging


def test_setup_logging_keeps_foreign_handlers() -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        setup_logging("WARNING")
        setup_logging("WARNING")

        assert foreign in root.handlers
        installed = [h for h in root.handlers if type(h).__name__ == "_ServiceHandler"]
        assert len(installed) == 1
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(foreign)


def test_importing_main_builds_no_app() -> None:
    assert not hasattr(task_service.main, "app")
    assert callable(task_service.main.create_app)
