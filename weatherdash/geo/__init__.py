from .service import GeoResolver
from .views import GeocodingResult

__all__ = ["GeoResolver", "GeocodingResult"]
