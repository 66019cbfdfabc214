"""
Infrastructure layer: PostgreSQL and in-memory repositories, DB pool,
retry policy for store reads and share token generation.
"""
