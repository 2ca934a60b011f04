"""
Facade acoustics engine - ISO 12354-4 transmission of interior sound to the outside
"""

__version__ = "1.0.0"
