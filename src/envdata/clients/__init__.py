"""Service clients.

Available clients:
- envdata: environmental data service client for stations, measures,
  time-series values and editorial metadata
"""

from . import envdata

__all__ = ["envdata"]
