"""Authentication package.

Files:
  jwt.py   - verification of bearer tokens issued by the identity provider
  deps.py  - FastAPI dependencies resolving the calling principal and its role
"""
