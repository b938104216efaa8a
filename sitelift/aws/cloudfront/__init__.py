from .cloudfront import (
    CloudFrontDistribution,
    CloudFrontDistributionResources,
    CloudfrontPriceClass,
)
from .dtos import EdgeFunctionSpec

__all__ = [
    "CloudFrontDistribution",
    "CloudFrontDistributionResources",
    "CloudfrontPriceClass",
    "EdgeFunctionSpec",
]
