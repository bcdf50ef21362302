"""Integrations subpackage for jsdu.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_bytes_conserved`` fixture

The plugin module is loaded by pytest itself and is not imported here, so
importing jsdu never requires pytest.
"""

from __future__ import annotations

__all__: list[str] = []
