"""Core lookup logic: version resolution, access checks and pagination."""
