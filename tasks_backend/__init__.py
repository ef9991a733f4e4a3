"""Personal task tracker backend: auth and per-user task CRUD over HTTP/JSON."""

__version__ = "1.0.0"
