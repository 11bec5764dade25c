"""Admin notification fan-out and read-state service."""
