"""Shared pytest configuration, marker assignment and run fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpt_resaver.schemas import ConnectionDescriptor, ResaveRunConfig


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def connection() -> ConnectionDescriptor:
    return ConnectionDescriptor(
        server_name="SQL01",
        database_name="Sales",
        user_id="report_user",
        password="s3cret",
    )


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Source tree with reports at two depths and one unrelated file."""
    root = tmp_path / "legacy"
    nested = root / "finance" / "2019"
    nested.mkdir(parents=True)
    (root / "orders.rpt").write_bytes(b"rpt")
    (nested / "ledger.RPT").write_bytes(b"rpt")
    (root / "notes.txt").write_text("not a report")
    return root


@pytest.fixture
def run_config(tmp_path: Path, source_dir: Path) -> ResaveRunConfig:
    return ResaveRunConfig(
        source_dir=source_dir,
        destination_dir=tmp_path / "out" / "resaved",
        server_name="SQL01",
        database_name="Sales",
        user_id="report_user",
        password="s3cret",
    )
