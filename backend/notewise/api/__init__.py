"""Notewise REST API package.

Sub-modules expose FastAPI routers for each domain:
- auth: registration, login and profile
- notes: owner-scoped note CRUD and plain search
- ai: completion, summary, categorization, related notes, natural-language search
"""
