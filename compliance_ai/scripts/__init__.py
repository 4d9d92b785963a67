"""
Maintenance scripts.

Each module is runnable with ``python -m compliance_ai.scripts.<name>`` and
exposes its work as async functions that take a session or engine, so the
same code runs from the command line and from tests.
"""
