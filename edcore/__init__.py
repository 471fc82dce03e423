"""Entity world model core: convex hulls, entities, joint relations, map-view state and update/query handling."""

__version__ = "0.1.0"