"""Type checker for a small statically typed language with modules, structs and interfaces."""

__version__ = "0.1.0"