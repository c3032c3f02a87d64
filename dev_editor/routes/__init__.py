# Routes package init
"""
Dev Editor — API Routes Package
================================

Route Inventory:
    - editor.py:  /__dev-editor/*   (content, image libraries, configs, conversion)
    - health.py:  GET /health       (service status)

Routes are thin: they parse the request, call one service, and shape the
response. Filesystem logic belongs in the services package.
"""
