"""crmrules - role inheritance and regional business-day deadline service."""

__version__ = "0.1.0"
