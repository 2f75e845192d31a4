"""Prompt templates for the Notewise AI features.

- completion: continue the user's draft text
- summarize: one-paragraph note summary
- categorize: category + tags as JSON
- keywords: search keywords for natural-language search
"""

from notewise.ai_router.prompts import categorize, completion, keywords, summarize

__all__ = ["categorize", "completion", "keywords", "summarize"]
