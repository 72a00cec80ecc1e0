"""Natural-language test instructions to typed test steps.

The `nlsteps` package turns free-form test instructions for HTTP API,
accessibility and security testing into ordered, typed action lists
that code emitters render as executable tests.

Key features:
- deterministic, rule-based classification with explicit confidence;
- cascading field and value extraction with typed literals;
- cross-line context tracking and an Expected Output grammar;
- security intent classification with human-readable reasoning;
- pluggable matcher tables and a pytest plugin for regression files.
"""
