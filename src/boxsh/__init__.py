"""boxsh: run your own shell inside a sandboxed package environment."""

__version__ = "0.1.0"
