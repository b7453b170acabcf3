"""Preview API for tab content."""
