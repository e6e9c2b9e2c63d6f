"""Shared test fixtures for swc packages.

Exports:
    compiler_service:
        ScriptedService: Compiler service double behind httpx.MockTransport
        RecordingSleep: asyncio.sleep stand-in that records delays
        ok: Builder for 200 responses in the service's JSON envelope
"""

from __future__ import annotations
