"""Version 1 of the Daily Routine API."""
