"""Services package: all business logic lives here, never in routers.

Files:
  pricing.py     - listing fee and approved earnings arithmetic
  validation.py  - vendor form checks, run before anything reaches the store
  storage.py     - photo object storage (verified-photos / business-photos buckets)
  identity.py    - role resolution, role assignment, sign-out
  vendor.py      - vendor listing, grouping and creation with best-effort uploads
  approval.py    - approve / reject workflow
  earnings.py    - salesperson earnings overview

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
