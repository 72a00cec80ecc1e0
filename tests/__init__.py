"""Test suite for the nlsteps package.

This package contains unit and integration tests validating
instruction classification, value extraction, security intents,
the command-line utilities and the pytest plugin.
"""
