"""
models/ - Domain Layer
======================
Plain dataclasses for needs, their images, categories and organizations.
"""
