import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import final

from sitelift.aws.cloudfront.invalidation import invalidate_cache
from sitelift.aws.outputs import StaticWebsiteOutputs
from sitelift.aws.s3.config import StaticWebsiteConfig
from sitelift.aws.s3.sync import S3Sync
from sitelift.exceptions import MissingStateError

logger = logging.getLogger(__name__)

type ProgressCallback = Callable[[str], None]


@final
@dataclass(frozen=True)
class DeploymentOutcome:
    file_change_count: int
    domain: str | None

    @property
    def url(self) -> str | None:
        return f"https://{self.domain}" if self.domain is not None else None


class StaticWebsiteDeployer:
    """Uploads a static website to its bucket and keeps the CDN cache in sync.

    Holds no state between operations: every operation reads the published outputs again.
    """

    def __init__(  # noqa: PLR0913
        self,
        name: str,
        config: StaticWebsiteConfig,
        outputs: StaticWebsiteOutputs,
        s3_sync: S3Sync,
        cloudfront_client,  # noqa: ANN001
        on_progress: ProgressCallback | None = None,
    ):
        self.name = name
        self.config = config
        self.outputs = outputs
        self._s3_sync = s3_sync
        self._cloudfront = cloudfront_client
        self._on_progress = on_progress

    async def post_deploy(self) -> int:
        """Upload the website after a successful provisioning. Returns changed file count."""
        return await self._upload_website(report_progress=False)

    async def upload(self) -> DeploymentOutcome:
        """Upload the website on demand and return where it is served."""
        logger.info("Deploying the static website '%s'", self.name)
        file_change_count = await self._upload_website(report_progress=True)
        domain = await self.outputs.domain()
        return DeploymentOutcome(file_change_count=file_change_count, domain=domain)

    async def pre_remove(self) -> int | None:
        """Empty the bucket so the infrastructure teardown can delete it.

        Returns the number of deleted objects, or None when no bucket was found.
        """
        bucket_name = await self.outputs.bucket_name()
        if bucket_name is None:
            logger.debug("No bucket found for '%s', nothing to empty", self.name)
            return None

        logger.info(
            "Emptying S3 bucket '%s' for the '%s' static website, else it cannot be deleted",
            bucket_name,
            self.name,
        )
        return await self._s3_sync.empty_bucket(bucket_name)

    async def url(self) -> str | None:
        domain = await self.outputs.domain()
        return f"https://{domain}" if domain is not None else None

    async def cname(self) -> str | None:
        return await self.outputs.cname()

    async def _upload_website(self, *, report_progress: bool) -> int:
        bucket_name = await self.outputs.bucket_name()
        if bucket_name is None:
            raise MissingStateError(
                f"Could not find the bucket in which to deploy the '{self.name}' website: "
                "did you forget to deploy it first?"
            )

        self._progress(
            f"Uploading directory '{self.config.path}' to bucket '{bucket_name}'",
            enabled=report_progress,
        )
        result = await self._s3_sync.sync(self.config.directory, bucket_name)

        if result.has_changes:
            self._progress("Clearing CloudFront cache", enabled=report_progress)
            distribution_id = await self.outputs.distribution_id()
            await invalidate_cache(self._cloudfront, distribution_id)

        return result.file_change_count

    def _progress(self, message: str, *, enabled: bool) -> None:
        logger.info(message)
        if enabled and self._on_progress is not None:
            self._on_progress(message)
