"""
Festival listing contract verifier.

Pure verification engine for the festival listing API payload and the page
that renders it, plus a thin httpx transport and a CLI runner for the
API-level checks.
"""

__version__ = "0.1.0"
