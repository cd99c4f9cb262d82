from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'pipelines.steps.render_site'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture
def settings(tmp_path):
    from config.settings import Settings

    return Settings(
        site_url="https://brands.example.com",
        site_name="Test Directory",
        publisher_name="Test Publisher",
        output_dir=str(tmp_path / "docs"),
        build_date="2026-01-15",
        run_env="test",
    )


@pytest.fixture
def write_catalog(tmp_path):
    def _write(payload, name: str = "catalog.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def acme_record():
    return {
        "id": "a",
        "name": "Acme",
        "address": "1 Main St",
        "phone": "555-0100",
        "keywords": ["x", "y", "z", "w"],
    }
