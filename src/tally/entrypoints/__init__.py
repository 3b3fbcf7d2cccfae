"""Entrypoints (inbound adapters) for TALLY.

Expose the harness to the outside world. The command-line interface parses
options, configures logging, imports the requested test modules and hands
control to :class:`tally.driver.Driver`.
"""
