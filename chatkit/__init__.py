"""Building blocks for a chat service backend: tokens, caller checks, request
validation, verification mail, spreadsheet import, IM API calls and request logging."""

__version__ = "0.1.0"