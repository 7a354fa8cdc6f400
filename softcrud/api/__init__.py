"""softcrud REST API — controllers, serialization and app wiring."""
