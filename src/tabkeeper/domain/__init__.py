"""Domain layer for tabkeeper application.

Services are imported from their own modules; importing them here would
create a cycle with tabkeeper.database.base, which depends on the entities.
"""
