"""User interfaces for defsmith."""
