from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypedDict, final

import pulumi
import pulumi_aws

from sitelift import context
from sitelift.component import Component

if TYPE_CHECKING:
    from sitelift.aws.s3.s3 import Bucket


# https://www.pulumi.com/registry/packages/aws/api-docs/cloudfront/distribution/#inputs
CloudfrontPriceClass = Literal["PriceClass_100", "PriceClass_200", "PriceClass_All"]

# Managed-CachingOptimized policy
# https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/using-managed-cache-policies.html
CACHING_OPTIMIZED_POLICY_ID = "658327ea-f89d-4fab-a63d-7e88639e58f6"


class FunctionAssociation(TypedDict):
    event_type: str
    function_arn: pulumi.Input[str]


@final
@dataclass(frozen=True)
class CloudFrontDistributionResources:
    distribution: pulumi_aws.cloudfront.Distribution
    origin_access_control: pulumi_aws.cloudfront.OriginAccessControl
    bucket_policy: pulumi_aws.s3.BucketPolicy
    function_associations: list[FunctionAssociation]


@final
class CloudFrontDistribution(Component[CloudFrontDistributionResources]):
    def __init__(  # noqa: PLR0913
        self,
        name: str,
        bucket: Bucket,
        error_document: str,
        domains: list[str] | None = None,
        certificate_arn: str | None = None,
        price_class: CloudfrontPriceClass = "PriceClass_100",
        function_associations: list[FunctionAssociation] | None = None,
    ):
        super().__init__(name)
        self.bucket = bucket
        self.error_document = error_document
        self.domains = domains or []
        self.certificate_arn = certificate_arn
        self.price_class = price_class
        self.function_associations = function_associations or []
        self._resources = None

    def _error_responses(self) -> list[dict]:
        # Unknown URLs are served by the error document. With the default index.html,
        # single page apps get a 200 and route client-side.
        spa = self.error_document == "index.html"
        return [
            {
                "error_code": error_code,
                "response_code": 200 if spa else 404,
                "response_page_path": f"/{self.error_document}",
                "error_caching_min_ttl": 0,
            }
            for error_code in (403, 404)
        ]

    def _create_resources(self) -> CloudFrontDistributionResources:
        origin_access_control = pulumi_aws.cloudfront.OriginAccessControl(
            context().prefix(f"{self.name}-oac"),
            description=f"Origin Access Control for {self.name}",
            origin_access_control_origin_type="s3",
            signing_behavior="always",
            signing_protocol="sigv4",
        )

        distribution = pulumi_aws.cloudfront.Distribution(
            context().prefix(self.name),
            comment=f"{context().prefix()}{self.name} website CDN",
            aliases=self.domains or None,
            origins=[
                {
                    "domain_name": self.bucket.resources.bucket.bucket_regional_domain_name,
                    "origin_id": f"{self.name}-S3-Origin",
                    "origin_access_control_id": origin_access_control.id,
                }
            ],
            enabled=True,
            is_ipv6_enabled=True,
            http_version="http2",
            default_root_object="index.html",
            default_cache_behavior={
                "allowed_methods": ["GET", "HEAD", "OPTIONS"],
                "cached_methods": ["GET", "HEAD"],
                "target_origin_id": f"{self.name}-S3-Origin",
                "compress": True,
                "viewer_protocol_policy": "redirect-to-https",
                "cache_policy_id": CACHING_OPTIMIZED_POLICY_ID,
                "function_associations": self.function_associations,
            },
            price_class=self.price_class,
            restrictions={
                "geo_restriction": {
                    "restriction_type": "none",
                }
            },
            viewer_certificate={
                "acm_certificate_arn": self.certificate_arn,
                "ssl_support_method": "sni-only",
                "minimum_protocol_version": "TLSv1.2_2021",
            }
            if self.certificate_arn and self.domains
            else {
                "cloudfront_default_certificate": True,
            },
            custom_error_responses=self._error_responses(),
        )

        bucket_policy = pulumi_aws.s3.BucketPolicy(
            context().prefix(f"{self.name}-bucket-policy"),
            bucket=self.bucket.resources.bucket.id,
            policy=pulumi.Output.all(
                distribution_arn=distribution.arn,
                bucket_arn=self.bucket.arn,
            ).apply(
                lambda args: pulumi.Output.json_dumps(
                    {
                        "Version": "2012-10-17",
                        "Statement": [
                            {
                                "Sid": "AllowCloudFrontServicePrincipal",
                                "Effect": "Allow",
                                "Principal": {"Service": "cloudfront.amazonaws.com"},
                                "Action": "s3:GetObject",
                                "Resource": f"{args['bucket_arn']}/*",
                                "Condition": {
                                    "StringEquals": {"AWS:SourceArn": args["distribution_arn"]}
                                },
                            }
                        ],
                    }
                )
            ),
            opts=pulumi.ResourceOptions(depends_on=[distribution]),
        )

        pulumi.export(f"cloudfront_{self.name}_domain_name", distribution.domain_name)
        pulumi.export(f"cloudfront_{self.name}_distribution_id", distribution.id)
        pulumi.export(f"cloudfront_{self.name}_arn", distribution.arn)

        return CloudFrontDistributionResources(
            distribution,
            origin_access_control,
            bucket_policy,
            self.function_associations,
        )
