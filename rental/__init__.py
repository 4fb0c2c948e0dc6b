"""
Vehicle rental back-office service.

Fleet, customer and booking management with overlap-checked reservations.
"""
__version__ = "1.0.0"
