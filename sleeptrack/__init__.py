"""SleepTrack: sleep logging and analysis API."""
