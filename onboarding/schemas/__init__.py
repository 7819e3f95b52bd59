"""Pydantic schemas package.

Folder intent:
  common.py    - CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py    - vendor responses, create result, approve / reject bodies
  category.py  - category responses
  identity.py  - principal and role schemas
  earnings.py  - earnings overview
"""
