"""Infrastructure layer — filesystem I/O, repository scanning, dependency graph."""
