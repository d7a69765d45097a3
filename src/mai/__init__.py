"""
Metacognitive Awareness Inventory (MAI) Package

Administers a paginated True/False self-report inventory, scores the
answers per category and prepares the results for export.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Widget toolkits
    - Chart drawing (beyond the optional matplotlib backend)
    - Persistence between sessions

Inventory definitions are static data.
SessionState is the only mutable object.
Everything else is derived from a session snapshot on demand.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
