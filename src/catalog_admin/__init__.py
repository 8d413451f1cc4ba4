"""Catalog admin service.

Admin-facing product management on top of a hosted Supabase project: admin
allow-list authorization, the product write path, image uploads into object
storage, and stress-test harnesses for the database and the HTTP API.
"""

__version__ = "0.1.0"
