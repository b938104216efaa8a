import re
from dataclasses import dataclass
from typing import final

import pulumi
import pulumi_aws

from sitelift import context
from sitelift.component import Component, safe_name

# Bucket names are limited to 63 characters. Pulumi does not suffix explicit bucket names.
BUCKET_NAME_MAX_LENGTH = 63

_INVALID_BUCKET_CHARS = re.compile(r"[^a-z0-9-]+")
_REPEATED_DASHES = re.compile(r"-{2,}")


def _bucket_part(value: str) -> str:
    return _REPEATED_DASHES.sub("-", _INVALID_BUCKET_CHARS.sub("-", value.lower()))


def bucket_name(prefix: str, name: str) -> str:
    """Build an S3 bucket name from the app prefix and component name.

    Bucket names allow only lowercase letters, digits, dots and hyphens. Anything else,
    dots included, becomes a hyphen so the name also works with virtual-host TLS.
    """
    return safe_name(
        _bucket_part(prefix).lstrip("-"),
        _bucket_part(name).strip("-"),
        BUCKET_NAME_MAX_LENGTH,
        "",
        0,
    )


@final
@dataclass(frozen=True)
class S3BucketResources:
    bucket: pulumi_aws.s3.Bucket
    public_access_block: pulumi_aws.s3.BucketPublicAccessBlock


@final
class Bucket(Component[S3BucketResources]):
    """Private bucket holding website files. Only CloudFront reads from it."""

    def __init__(self, name: str):
        super().__init__(name)
        self._resources = None

    def _create_resources(self) -> S3BucketResources:
        bucket = pulumi_aws.s3.Bucket(
            context().prefix(self.name),
            bucket=bucket_name(context().prefix(), self.name),
        )

        public_access_block = pulumi_aws.s3.BucketPublicAccessBlock(
            context().prefix(f"{self.name}-pab"),
            bucket=bucket.id,
            block_public_acls=True,
            block_public_policy=True,
            ignore_public_acls=True,
            restrict_public_buckets=True,
        )

        pulumi.export(f"s3bucket_{self.name}_arn", bucket.arn)
        pulumi.export(f"s3bucket_{self.name}_name", bucket.bucket)

        return S3BucketResources(bucket, public_access_block)

    @property
    def arn(self) -> pulumi.Output[str]:
        """Get the ARN of the S3 bucket."""
        return self.resources.bucket.arn
