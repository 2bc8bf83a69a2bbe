"""Read-only access to the directory table of Valve VPK archives."""

__version__ = "0.1.0"
