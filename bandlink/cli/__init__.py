"""Command-line entry points for bandlink.

- ``python -m bandlink.cli`` (or the ``bandlink`` console script): resolve
  the configured input CSV to Bandcamp links.
"""
