"""
Utility functions module.

Common utility functions for time handling shared across the system.

Time Semantics:
- Deadlines and creation times are integer milliseconds since the epoch
- Naive datetimes and datetime-local strings are interpreted as local time
- The store clock is injectable so tests never depend on wall-clock time
"""
