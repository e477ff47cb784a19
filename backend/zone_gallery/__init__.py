"""
Zone Gallery — Application Package
===================================

HTTP gateway over a Cloudinary folder taxonomy:

    Zones / zone / supervisor / category / ward / date / image

Layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   GalleryService (orchestration)    │  ← one search call per request
    ├─────────────────────────────────────┤
    │  Taxonomy resolver (pure functions) │  ← identifier → level values
    ├─────────────────────────────────────┤
    │  MediaSearchService (Cloudinary)    │  ← external HTTPS API
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
