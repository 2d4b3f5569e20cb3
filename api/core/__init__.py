"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(settings, logging, error mapping). Keep feature-specific storage and
business logic in the corresponding feature package (e.g. `comics/`).
"""
