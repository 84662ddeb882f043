"""
FastAPI Todo Backend package.

This module marks the 'src.api' directory as a Python package. The HTTP
application lives in `src.api.main` (`src.api.main:app`); the business rules it
serves live in `src.domain`.
"""
