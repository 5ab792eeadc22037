"""goimpact - compute the Go packages impacted by a change between two commits."""

__version__ = "0.1.0"
