"""linkcurator — triage unresolved links in a markdown note vault."""

__version__ = "0.3.0"
