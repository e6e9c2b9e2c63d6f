"""swc-cli: command-line client for the SecurityWorker compiler service.

Uploads a source file, waits for the remote compile and writes the
compiled artifact to ``./<job>.js``.
"""

from __future__ import annotations

__version__ = "0.1.0"
