"""v1 router package — all /api/v1/* endpoints live here.

Files:
  books.py  — REFERENCE router pattern (standard, raw and undeclared routes)

Rule: Routers declare response features and hand back plain data.
      The envelope is built by StandardResponseRoute, never by hand.
"""
