"""
certificate_service — in-memory certificate records over HTTP.

Create, fetch, list and update certificate records, and bulk-import them
from uploaded CSV files, optionally rendered through a text template.

Built on the Railway-Oriented Programming (ROP) helpers in `railway` for
explicit, composable error handling.
"""

__version__ = "0.1.0"
