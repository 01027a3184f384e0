"""Catalog service providers."""

from bandlink.providers.catalog.bandcamp_provider import BandcampProvider

__all__ = ["BandcampProvider"]
