"""Grouping of flat track records into artist → album → tracks."""

from __future__ import annotations

from collections.abc import Iterable

from bandlink.models.tracks import TrackRecord

ArtistGroups = dict[str, dict[str, list[TrackRecord]]]


def group_by_artist_and_album(records: Iterable[TrackRecord]) -> ArtistGroups:
    """Partition *records* by exact artist name, then exact album name.

    Single pass; containers are created on first encounter, so dict
    insertion order is the order in which each artist and album first
    appears.  Records keep their input order within an album.  No sorting,
    no de-duplication, no case folding.
    """
    grouped: ArtistGroups = {}
    for record in records:
        grouped.setdefault(record.artist_name, {}).setdefault(record.album_name, []).append(record)
    return grouped


def count_albums(groups: ArtistGroups) -> int:
    return sum(len(albums) for albums in groups.values())
