import logging

from shareregistry.logging import ProfessionalFormatter, configure_logging


def _record(level):
    return logging.LogRecord("shareregistry.test", level, __file__, 1, "hello %s", ("x",), None)


def test_formatter_uses_three_letter_levels():
    fmt = ProfessionalFormatter()

    assert "| WRN | shareregistry.test | hello x" in fmt.format(_record(logging.WARNING))
    assert "| DBG |" in fmt.format(_record(logging.DEBUG))
    assert "| ??? |" in fmt.format(_record(5))


def test_configure_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before = list(root.handlers)

    assert configure_logging(logging.INFO) is root
    configure_logging(logging.INFO)

    added = [h for h in root.handlers if h not in before]
    try:
        assert len(added) <= 1
    finally:
        for h in added:
            root.removeHandler(h)
