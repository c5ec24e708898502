"""Service layer: use cases orchestrated over units of work and ports."""
