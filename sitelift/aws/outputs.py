"""Infrastructure outputs published by provisioning and read back at deployment time.

Each output of a static website is stored in its own SSM parameter:

    /sitelift/{app}/{env}/{website}/{output}

Outputs only exist once provisioning has run at least once. A missing output is
returned as None so callers decide how severe its absence is.
"""

import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError

from sitelift.exceptions import OperationError
from sitelift.home import Home

logger = logging.getLogger(__name__)

OUTPUT_PARAM = "/sitelift/{app}/{env}/{website}/{output}"

BUCKET_NAME = "bucketName"
DOMAIN = "domain"
CNAME = "cname"
DISTRIBUTION_ID = "distributionId"

OUTPUT_NAMES = (BUCKET_NAME, DOMAIN, CNAME, DISTRIBUTION_ID)


def output_param_name(app: str, env: str, website: str, output: str) -> str:
    return OUTPUT_PARAM.format(app=app, env=env, website=website, output=output)


def website_domain(domains: list[str], cdn_domain_name: str) -> str:
    """Domain a website is served on: the first custom domain, else the CDN's own domain."""
    return domains[0] if domains else cdn_domain_name


class StaticWebsiteOutputs:
    """Reads the outputs of one static website. Nothing is cached between reads."""

    def __init__(self, home: Home, app: str, env: str, website: str) -> None:
        self._home = home
        self._app = app
        self._env = env
        self._website = website

    def param_name(self, output: str) -> str:
        return output_param_name(self._app, self._env, self._website, output)

    async def get(self, output: str) -> str | None:
        name = self.param_name(output)
        try:
            value = await asyncio.to_thread(self._home.read_param, name)
        except (BotoCoreError, ClientError) as e:
            raise OperationError("read output", name, str(e)) from e
        if value is None:
            logger.debug("Output '%s' of website '%s' is not resolved", output, self._website)
        return value

    async def bucket_name(self) -> str | None:
        return await self.get(BUCKET_NAME)

    async def domain(self) -> str | None:
        return await self.get(DOMAIN)

    async def cname(self) -> str | None:
        return await self.get(CNAME)

    async def distribution_id(self) -> str | None:
        return await self.get(DISTRIBUTION_ID)

    async def resolve_all(self) -> dict[str, str | None]:
        values = await asyncio.gather(*(self.get(name) for name in OUTPUT_NAMES))
        return dict(zip(OUTPUT_NAMES, values, strict=True))
