from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.views",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="History query returned %d records",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_context_keys() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s | %(message)s")

    output = formatter.format(_record(location="NAC", slug="nac", limit=3, reason=None))

    assert output == "INFO | History query returned 3 records | location=NAC slug=nac limit=3"


def test_formatter_without_context_is_unchanged() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record()) == "History query returned 3 records"


def test_context_precedes_traceback() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        record = _record(route="/api/all")
        record.exc_info = sys.exc_info()

    lines = formatter.format(record).splitlines()

    assert lines[0] == "History query returned 3 records | route=/api/all"
    assert lines[-1] == "RuntimeError: boom"
