"""TaskMaster: a username-keyed to-do list backend served as a single JSON action endpoint."""

__version__ = "1.0.0"
