"""Upload a file to cloud object storage under a date-partitioned key."""

__version__ = "1.0.0"
