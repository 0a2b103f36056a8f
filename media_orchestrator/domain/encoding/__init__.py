"""
Encoding Domain

Transforms and the media service management interface.
"""

from .repositories import IMediaServicesRepository
from .services import EncodingTransformManager
from .value_objects import Asset, OnErrorType, Priority, Transform, TransformOutput

__all__ = [
    'Asset',
    'EncodingTransformManager',
    'IMediaServicesRepository',
    'OnErrorType',
    'Priority',
    'Transform',
    'TransformOutput',
]
