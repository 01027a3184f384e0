"""Resolution services: catalog lookups, per-album matching and grouping."""

from bandlink.services.catalog_client import CatalogClient
from bandlink.services.grouping import group_by_artist_and_album
from bandlink.services.match_resolver import MatchResolver, match_album_track

__all__ = [
    "CatalogClient",
    "MatchResolver",
    "group_by_artist_and_album",
    "match_album_track",
]
