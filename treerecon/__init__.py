"""Tree reconstruction from leaf distance matrices, with generation, comparison and batch checking."""

__version__ = "0.1.0"