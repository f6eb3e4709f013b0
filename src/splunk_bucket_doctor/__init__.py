"""Splunk index bucket scanning and recovery tooling."""

__version__ = "0.1.0"
