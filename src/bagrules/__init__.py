"""bagrules — bag-containment rule parser and graph queries."""

__version__ = "0.1.0"
