"""Settings and logging setup shared by the service layer."""
