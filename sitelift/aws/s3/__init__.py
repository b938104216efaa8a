from .config import SecurityConfig, StaticWebsiteConfig, StaticWebsiteConfigDict
from .s3 import Bucket, S3BucketResources
from .s3_static_website import StaticWebsite, StaticWebsiteResources

__all__ = [
    "Bucket",
    "S3BucketResources",
    "SecurityConfig",
    "StaticWebsite",
    "StaticWebsiteConfig",
    "StaticWebsiteConfigDict",
    "StaticWebsiteResources",
]
