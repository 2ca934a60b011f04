"""
Typed failures raised by the facade transmission engine
"""

from typing import Optional


class FacadeAcousticsError(ValueError):
    """Base error carrying the element and band that caused the failure"""

    def __init__(self, message: str, element_id: Optional[str] = None, band: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.element_id = element_id
        self.band = band

    def context(self) -> dict:
        """Element/band context for result metadata"""
        context = {}
        if self.element_id is not None:
            context['element_id'] = self.element_id
        if self.band is not None:
            context['band'] = self.band
        return context

    def __str__(self) -> str:
        details = self.context()
        if not details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in details.items())
        return f"{self.message} ({rendered})"


class DomainError(FacadeAcousticsError):
    """Invalid physical input: non-positive volume, reverberation time, area or absorption"""


class ConfigurationError(FacadeAcousticsError):
    """Required data is missing or malformed: absent bands, unknown materials, bad vectors"""
