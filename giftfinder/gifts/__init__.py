"""
Gift catalog and demographic matching package.

Responsibilities:
- Describe gifts and their optional eligibility criteria.
- Match a recipient profile (sex, age, nationality, job) against the catalog.
- Keep the catalog in memory, seeded from and optionally persisted to CSV.
"""
