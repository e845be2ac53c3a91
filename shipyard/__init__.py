"""shipyard - build, tag and push container images for a set of sub-projects."""

__version__ = "0.1.0"
