"""pybyte: compile Python sources to bytecode artifacts and run them."""

__version__ = "0.1.0"
