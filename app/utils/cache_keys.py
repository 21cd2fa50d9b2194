"""
Cache keys for the application.

Routes and services share these names so that every write path can
invalidate exactly the entries its read paths populate. Hot lists are
cached under a single fixed key each; there is no per-item entry.
"""

SKILLS_ALL_KEY = "skills_all"
PROJECTS_ALL_KEY = "projects_all"

# Keys that list data owned by a portfolio user
PORTFOLIO_LIST_KEYS: tuple[str, ...] = (SKILLS_ALL_KEY, PROJECTS_ALL_KEY)
