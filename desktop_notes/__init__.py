"""Desktop notes: a small JSON-backed note-taking app."""

__version__ = "0.1.0"
