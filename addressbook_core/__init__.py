"""
Address book core REST API

A single in-memory collection of person records exposed as HTTP
resource with support for conditional requests based on entity tags.
"""

__version__ = "0.1.0"
