"""
ContractGuard - plain-English contract review for creators.

A FastAPI service that extracts text from contract PDFs and asks a language
model for a structured analysis, plus the client-side review workflow that
drives it.
"""

__version__ = "1.0.0"
