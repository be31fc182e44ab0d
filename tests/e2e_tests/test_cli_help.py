"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import shutil
import subprocess

import pytest

import rpt_resaver

pytestmark = pytest.mark.skipif(
    shutil.which("rpt-resaver") is None,
    reason="rpt-resaver console script is not installed",
)


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert rpt_resaver.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["rpt-resaver", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Resave legacy report files" in result.stdout
