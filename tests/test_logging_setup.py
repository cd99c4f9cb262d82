from __future__ import annotations

import logging

from utils.logging_setup import SafeExtraFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("pipelines", logging.INFO, __file__, 1, "Rendered Acme", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_fills_missing_extras(monkeypatch):
    monkeypatch.delenv("RUN_ID", raising=False)
    fmt = SafeExtraFormatter("%(message)s step=%(step)s entity=%(entity)s run_id=%(run_id)s")
    assert fmt.format(_record()) == "Rendered Acme step=- entity=- run_id=-"


def test_formatter_keeps_given_extras_and_reads_run_id(monkeypatch):
    monkeypatch.setenv("RUN_ID", "abc")
    fmt = SafeExtraFormatter("%(step)s %(entity)s %(run_id)s")
    assert fmt.format(_record(step="render", entity="acme")) == "render acme abc"
