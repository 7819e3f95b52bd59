"""Routers package: HTTP endpoint definitions.

Files:
  root.py  - role-based redirect from /
  v1/      - Versioned API routes (/api/v1/*)
"""
