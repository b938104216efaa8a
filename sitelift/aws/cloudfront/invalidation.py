import asyncio
import logging
import uuid

from botocore.exceptions import BotoCoreError, ClientError

from sitelift.exceptions import OperationError

logger = logging.getLogger(__name__)

ALL_PATHS = "/*"


async def invalidate_cache(cloudfront_client, distribution_id: str | None) -> str | None:  # noqa: ANN001
    """Invalidate every cached path of the distribution.

    An unresolved distribution (not provisioned yet) is not an error: nothing is cached,
    so nothing is invalidated and None is returned. Otherwise returns the invalidation id.
    """
    if distribution_id is None:
        logger.debug("No CloudFront distribution found, skipping cache invalidation")
        return None

    logger.info("Invalidating CloudFront cache of distribution '%s'", distribution_id)
    try:
        response = await asyncio.to_thread(
            cloudfront_client.create_invalidation,
            DistributionId=distribution_id,
            InvalidationBatch={
                "Paths": {"Quantity": 1, "Items": [ALL_PATHS]},
                "CallerReference": uuid.uuid4().hex,
            },
        )
    except (BotoCoreError, ClientError) as e:
        raise OperationError("invalidate", distribution_id, str(e)) from e

    invalidation_id = response["Invalidation"]["Id"]
    logger.debug("Created invalidation '%s'", invalidation_id)
    return invalidation_id
