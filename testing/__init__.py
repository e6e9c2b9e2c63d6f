"""Shared testing infrastructure for swc.

Modules:
    fixtures: A scripted compiler service and test doubles shared by the
        swc-client and swc-cli test suites.

Usage:
    from testing.fixtures.compiler_service import ScriptedService, ok
"""

from __future__ import annotations
