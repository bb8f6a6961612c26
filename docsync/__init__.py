"""Mirror a local directory into a document management service."""

__version__ = "0.1.0"
