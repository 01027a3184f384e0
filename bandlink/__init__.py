"""bandlink: resolve playlist tracks to Bandcamp purchase links.

Reads a track export, looks each artist, album and track up in the
Bandcamp catalog with pacing and retry-with-backoff, and appends one
result row per track to an output CSV.
"""

__version__ = "0.1.0"
