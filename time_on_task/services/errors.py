"""Common error handling for all services"""

class ServiceError(Exception):
    """Base exception for all service errors"""
    pass

class DatabaseError(ServiceError):
    """Base exception for database-related errors"""
    pass

class ConfigError(ServiceError):
    """Base exception for configuration errors"""
    pass

class EventLoadError(ServiceError):
    """Raised when an event import file cannot be parsed"""
    pass
