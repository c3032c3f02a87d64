# Services package init
"""
Dev Editor — Services Layer
============================

What:  Filesystem logic sitting between the routes (HTTP) and the disk.
How:   Services accept plain values, enforce sanitization and containment,
       perform the I/O, and raise application exceptions on failure.

Service Inventory:
    - ContentService:  save / read / create Markdown content files
    - ImageLibrary:    upload / list / delete images (gallery, memes)
    - JsonDocument:    load / save opaque JSON config blobs
    - ImageConverter:  HEIC (or any Pillow-readable image) → JPEG
    - text, paths:     sanitizers, front-matter rendering, path containment
"""
