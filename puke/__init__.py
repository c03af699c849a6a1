"""Runtime building blocks: histograms, lazy values, metrics, a stack, a machine table and ring primitives."""

__version__ = "0.1.0"