# Routes package init
"""
Zone Gallery — API Routes Package
==================================

Route Inventory:
    - zones.py:   GET /api/zones                    (list zones)
                  GET /api/zones/{path:path}        (drill down; 5 segments → images)
    - images.py:  GET /getImages                    (images by query parameters)
    - health.py:  GET /health                       (service health check)

Routes stay thin: extract parameters, call GalleryService, return the result.
"""
