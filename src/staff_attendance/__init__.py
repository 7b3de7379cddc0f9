"""Staff attendance package.

Organized by feature modules (employees, attendance, reports) with a thin Flask
controller layer over service/repository layers.
"""

__version__ = "0.1.0"
