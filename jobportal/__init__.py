"""
Job Portal
REST backend for job seekers and employers.

Architecture:
- MongoDB: users, jobs, applications
- S3-compatible storage: resumes
- SendGrid: verification / reset emails
- Tesseract + OpenAI-compatible API: resume analysis
"""

__version__ = "1.0.0"
