"""
filegate

Signed, time-limited capability tokens for reading objects out of an
object store, and the Flask API that issues and honours them.
"""

__version__ = "1.0.0"
