from pmtracker.services.facility.asset_service import AssetService, build_asset_response
from pmtracker.services.facility.location_service import LocationService

__all__ = ["AssetService", "LocationService", "build_asset_response"]
