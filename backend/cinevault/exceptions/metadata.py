
class MetadataServiceException(Exception):
    """Base exception for all metadata catalog errors."""
    pass

class MovieNotFoundException(MetadataServiceException):
    """Raised when the catalog answers a search or lookup with no results."""
    pass

class MetadataRequestException(MetadataServiceException):
    """Raised when the catalog cannot be reached or returns an unreadable response."""
    pass

class ConfigurationException(MetadataServiceException):
    """Raised when the metadata client is missing required settings (e.g., the API key)."""
    pass
