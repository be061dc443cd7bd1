"""
services/ - Business Logic Layer
=================================
Use cases built on top of the repositories. Services turn domain
errors into display-ready results; they never issue SQL themselves.
"""
