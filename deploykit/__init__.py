"""deploykit: build, push and deploy container images from CI jobs."""

__version__ = "0.1.0"
