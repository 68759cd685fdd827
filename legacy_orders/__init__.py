"""Legacy orders service: safe status transitions on a shared ERP orders table."""

__version__ = "1.0.0"
