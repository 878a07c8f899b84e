"""AWS infrastructure implementations."""

from .s3_client import S3Client, parse_s3_uri
from .session_manager import AWSSessionManager

__all__ = [
    'S3Client',
    'parse_s3_uri',
    'AWSSessionManager'
]
