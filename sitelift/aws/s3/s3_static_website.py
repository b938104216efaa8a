from dataclasses import dataclass
from typing import Unpack, final

import pulumi
import pulumi_aws

from sitelift import context
from sitelift.aws.cloudfront import CloudFrontDistribution
from sitelift.aws.cloudfront.dtos import EdgeFunctionSpec
from sitelift.aws.cloudfront.functions import build_edge_functions
from sitelift.aws.outputs import (
    BUCKET_NAME,
    CNAME,
    DISTRIBUTION_ID,
    DOMAIN,
    output_param_name,
    website_domain,
)
from sitelift.aws.s3.config import (
    StaticWebsiteConfig,
    StaticWebsiteConfigDict,
    validate_website_config,
)
from sitelift.aws.s3.s3 import Bucket
from sitelift.component import Component
from sitelift.exceptions import ConfigurationError

OUTPUT_DESCRIPTIONS = {
    BUCKET_NAME: "Name of the bucket that stores the static website.",
    DOMAIN: "Website domain name.",
    CNAME: "CloudFront CNAME.",
    DISTRIBUTION_ID: "ID of the CloudFront distribution.",
}


@final
@dataclass(frozen=True)
class StaticWebsiteResources:
    bucket: pulumi_aws.s3.Bucket
    functions: list[pulumi_aws.cloudfront.Function]
    cloudfront_distribution: CloudFrontDistribution
    output_parameters: dict[str, pulumi_aws.ssm.Parameter]


@final
class StaticWebsite(Component[StaticWebsiteResources]):
    """Static website stored in a private S3 bucket and served by CloudFront.

    Files are not part of the infrastructure: they are uploaded after provisioning
    and on demand with `sitelift upload`.
    """

    def __init__(
        self,
        name: str,
        config: StaticWebsiteConfig | StaticWebsiteConfigDict | None = None,
        **opts: Unpack[StaticWebsiteConfigDict],
    ):
        if config is not None and opts:
            raise ConfigurationError(
                f"Static website '{name}': pass either a config or keyword options, not both."
            )
        try:
            self.config = validate_website_config(config if config is not None else opts)
        except ConfigurationError as e:
            raise ConfigurationError(
                f"Invalid configuration for the static website '{name}': {e}"
            ) from e
        super().__init__(name)
        self.edge_functions: list[EdgeFunctionSpec] = build_edge_functions(
            context().prefix(), name, self.config
        )

    def _create_resources(self) -> StaticWebsiteResources:
        bucket = Bucket(f"{self.name}-bucket")

        functions = [
            pulumi_aws.cloudfront.Function(
                context().prefix(f"{self.name}-{spec.event_type}"),
                name=spec.name,
                runtime="cloudfront-js-1.0",
                comment=f"{spec.event_type} function of the {self.name} website",
                code=spec.code,
                publish=True,
            )
            for spec in self.edge_functions
        ]

        cloudfront_distribution = CloudFrontDistribution(
            name=f"{self.name}-cdn",
            bucket=bucket,
            error_document=self.config.error_document,
            domains=self.config.domains,
            certificate_arn=self.config.certificate,
            function_associations=[
                {"event_type": spec.event_type, "function_arn": function.arn}
                for spec, function in zip(self.edge_functions, functions, strict=True)
            ],
        )
        distribution = cloudfront_distribution.resources.distribution
        domains = self.config.domains

        output_values = {
            BUCKET_NAME: bucket.resources.bucket.bucket,
            DOMAIN: distribution.domain_name.apply(lambda d: website_domain(domains, d)),
            CNAME: distribution.domain_name,
            DISTRIBUTION_ID: distribution.id,
        }
        output_parameters = {}
        for output, value in output_values.items():
            output_parameters[output] = pulumi_aws.ssm.Parameter(
                context().prefix(f"{self.name}-{output}"),
                name=output_param_name(context().name, context().env, self.name, output),
                type="String",
                value=value,
                description=OUTPUT_DESCRIPTIONS[output],
            )
            pulumi.export(f"static_website_{self.name}_{output}", value)

        return StaticWebsiteResources(
            bucket=bucket.resources.bucket,
            functions=functions,
            cloudfront_distribution=cloudfront_distribution,
            output_parameters=output_parameters,
        )

    @property
    def cname(self) -> pulumi.Output[str]:
        """Domain name generated by CloudFront, to point DNS records at."""
        return self.resources.cloudfront_distribution.resources.distribution.domain_name
