#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest for the TestCase suites
    python -m unittest discover tests -v

Database tests run against an in-memory SQLite database (see the
``session_factory`` fixture in conftest.py); no server is needed.
"""
