"""
Recruiting Platform Backend
CRUD API over companies, their jobs, and applications.

Architecture:
- MongoDB: companies, jobs, applications (candidates read only)
- FastAPI: routes mounted under /api
- Company.jobs is kept in step with job documents by CompanyJobService
"""

__version__ = "1.0.0"
