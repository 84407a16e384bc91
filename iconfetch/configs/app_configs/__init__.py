"""Application level configuration: logging and error reporting."""
