"""
Unit Tests for Package Import Order

Each module is imported first thing in a fresh interpreter, so an import
cycle between packages shows up regardless of what the test session has
already loaded.
"""

import subprocess
import sys

import pytest


@pytest.mark.unit
class TestPackageImports:
    """Test that every package imports on its own."""

    @pytest.mark.parametrize(
        "module",
        [
            "product_catalog.infrastructure.cache",
            "product_catalog.infrastructure.cache.store",
            "product_catalog.infrastructure.cache.diagnostics",
            "product_catalog.infrastructure.monitoring",
            "product_catalog.infrastructure.monitoring.health_checker",
            "product_catalog.application.services",
            "product_catalog.application.app",
        ],
    )
    def test_module_imports_in_fresh_interpreter(self, module):
        result = subprocess.run(
            [sys.executable, "-c", f"import {module}"],
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
