"""Ruby-style strings, integers, arrays, hashes and a class system with metaprogramming."""

__version__ = "0.1.0"