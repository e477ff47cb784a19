# Services package init
"""
Zone Gallery — Services Layer
==============================

Service Inventory:
    - taxonomy: Pure resolver turning identifiers into taxonomy level values
    - MediaSearchService (abstract): Interface for the hosted media search API
    - CloudinarySearchService: Concrete implementation over the Cloudinary Search API
    - GalleryService: Builds search expressions and runs the resolver on the results
"""
