"""v1 router package - all /api/v1/* endpoints live here.

Files:
  auth.py        - current principal, sign-out
  categories.py  - category lookup for the vendor form
  vendors.py     - salesperson vendor list and vendor submission
  earnings.py    - salesperson earnings overview
  admin.py       - review queues, approve / reject
  roles.py       - role lookup and assignment

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to onboarding/services/.
"""
