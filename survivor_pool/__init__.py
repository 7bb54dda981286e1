"""Season-long survivor pick pool.

Core operations:
- phase/week resolution from the stored schedule (services.phase_week)
- provider result ingestion (services.ingestion)
- pick settlement (services.settlement)
- leaderboard partitioning (services.leaderboard)

Pick submission and schedule listing live in services.picks and
services.schedule; Celery entry points in jobs.
"""
