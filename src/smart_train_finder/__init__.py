"""Smart train finder - multi-leg journey search over the DB Timetables API."""

__version__ = "0.1.0"
