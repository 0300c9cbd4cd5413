"""pomless — synthesize project descriptors for Eclipse/OSGi module directories."""

__version__ = "0.1.0"
