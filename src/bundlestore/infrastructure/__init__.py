"""Infrastructure layer — database engine, schema, migrations, repositories.

This layer depends on stdlib, the domain records, and SQLAlchemy/Alembic.
It must never import from services.
"""
