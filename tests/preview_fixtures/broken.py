# Import failure is intentional: discovery must log it and keep scanning.
raise RuntimeError("preview_fixtures.broken fails to import")
