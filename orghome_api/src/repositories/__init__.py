"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries for users, organizations and
repositories. Each one is bound to the AsyncSession it is constructed with.
"""
